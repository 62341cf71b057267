"""DeskMate tool plugins. Each subpackage exposes ``tool.run`` and ``tool.register_cli``."""
