"""Project identity constants shared by the CLI and the router."""

__version__ = "0.1.0"
__codename__ = "OPENSPEC"
__tagline__ = "Propose. Generate. Validate. Archive. Audit."

BANNER = r"""
  ___                   ____                  
 / _ \ _ __   ___ _ __ / ___| _ __   ___  ___ 
| | | | '_ \ / _ \ '_ \\___ \| '_ \ / _ \/ __|
| |_| | |_) |  __/ | | |___) | |_) |  __/ (__ 
 \___/| .__/ \___|_| |_|____/| .__/ \___|\___|
      |_|                    |_|              
"""
