"""
Language-specific code generators.

This module contains generators for the supported target languages.
"""

from .typescript import TypeScriptGenerator, create_typescript_generator

__all__ = ["TypeScriptGenerator", "create_typescript_generator"]
