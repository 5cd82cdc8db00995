"""
Core building blocks shared by the CLI and the viewer.

Components:
- duration.py: Duration/TimeUnit and the "1 day" / "1.day" parser
- app_config.py: config.json model, defaults, inline override, ConfigStore
- jsonfile.py: JSON read/write helpers (whole-file replace)
- ports.py: Protocols for the chat/summary boundary
"""
