"""Security module for access tokens and log masking."""

from .secrets import (
    FIGMA_TOKEN_ENV,
    GITHUB_TOKEN_ENV,
    SecretsContext,
    SecretsManager,
    SecretsMaskingFilter,
    install_masking,
)

__all__ = [
    'FIGMA_TOKEN_ENV',
    'GITHUB_TOKEN_ENV',
    'SecretsContext',
    'SecretsManager',
    'SecretsMaskingFilter',
    'install_masking',
]
