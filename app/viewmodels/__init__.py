from .config_bridge_vm import ConfigBridgeViewModel
