"""
File Chain (see DEVELOPER.md):
Doc Version: v1.0.0

- Called by: Python import system (when `import netcompose` is executed), entry_points (CLI commands)
- Reads from: importlib.metadata (package metadata), config.py, compose.py, function.py, main.py

Purpose: Package initialization for NetCompose, a composition function that
         turns a composite network resource (id, count, includeGateway,
         region, providerConfigName) into VPC and InternetGateway managed
         resources linked through label selectors.

Package Structure:
    - main.py: CLI entry point, renders requests read from files
    - compose.py: Composer, spec extraction, unit synthesis and merge
    - function.py: FunctionRequest / FunctionResponse boundary objects
    - schema.py: unit kind to apiVersion/kind table and wire conversion
    - fieldpath.py: tolerant dotted path lookups into resource documents
    - config.py: Configuration management
    - models.py: Data models and errors
    - colorlog.py: Colored log output formatter

Entry Points:
    - netcompose: CLI command (calls main.main())
    - python -m netcompose: Direct module execution

Public API Exports:
    - Composer, Config, FunctionRequest, FunctionResponse, main()
    - __version__, __description__: from package metadata
"""

import importlib.metadata as importlib_metadata

from .config import Config
from .compose import Composer
from .function import FunctionRequest, FunctionResponse
from .main import main

_metadata = importlib_metadata.metadata("netcompose")
__version__ = _metadata["Version"]
__description__ = _metadata["Summary"]


__all__ = ["Composer", "Config", "FunctionRequest", "FunctionResponse", "main"]
