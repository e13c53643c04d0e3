"""
Language model boundary modules.

Exports: ModelClient, build_chat_model
"""

from .model_client import ModelClient, build_chat_model

__all__ = ["ModelClient", "build_chat_model"]
