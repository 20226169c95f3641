"""
tracker-linker: task mentions in markdown notes -> tracker issues and links.

Subpackages:
- core: sanitizer, mention matcher, resolution controller, ports
- tracker: task creation models and the HTTP client
- connectors: document surface and console host
- cli: composition root, slash commands, entry point
"""
