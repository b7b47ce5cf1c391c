from .system_utils import SystemUtils
