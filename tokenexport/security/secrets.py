"""
Access tokens and log masking.

- Tokens are read from the process environment (FIGMA_TOKEN, GITHUB_TOKEN)
- An explicit value (e.g. --token) wins over the environment
- Empty strings count as missing
- Every resolved value is masked as '***' in log output
"""

import logging
import os
import re
from typing import Dict, List, Optional, Set, Any
from dataclasses import dataclass, field


FIGMA_TOKEN_ENV = "FIGMA_TOKEN"
GITHUB_TOKEN_ENV = "GITHUB_TOKEN"


@dataclass
class SecretsContext:
    """Result of resolving a set of named secrets."""
    declared_secrets: List[str]
    missing_secrets: List[str] = field(default_factory=list)
    secret_values: Dict[str, str] = field(default_factory=dict)

    def get(self, name: str) -> Optional[str]:
        return self.secret_values.get(name)


class SecretsManager:
    """Resolves access tokens and remembers them for masking."""

    def __init__(self):
        self._masked_values: Set[str] = set()

    def resolve_secrets(
        self,
        declared_secrets: List[str],
        overrides: Optional[Dict[str, Optional[str]]] = None
    ) -> SecretsContext:
        """
        Resolve secrets by name.

        Args:
            declared_secrets: Environment variable names to read
            overrides: Explicit values by name; a non-empty override wins

        Returns:
            SecretsContext with values and the names that are missing
        """
        context = SecretsContext(declared_secrets=list(declared_secrets))
        overrides = overrides or {}

        for name in context.declared_secrets:
            value = overrides.get(name) or os.environ.get(name, "")
            if value:
                context.secret_values[name] = value
                self._masked_values.add(value)
            else:
                context.missing_secrets.append(name)

        return context

    def mask_text(self, text: str) -> str:
        """Replace known secret values with '***'."""
        if not text or not self._masked_values:
            return text

        masked = text
        # Longer values first so a secret containing another is fully masked
        for secret_value in sorted(self._masked_values, key=len, reverse=True):
            if secret_value in masked:
                masked = re.sub(re.escape(secret_value), '***', masked)

        return masked

    def mask_dict(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively mask secrets in a dictionary (e.g. a message payload before logging)."""
        if not data or not self._masked_values:
            return data

        masked = {}
        for key, value in data.items():
            if isinstance(value, str):
                masked[key] = self.mask_text(value)
            elif isinstance(value, dict):
                masked[key] = self.mask_dict(value)
            elif isinstance(value, list):
                masked[key] = [
                    self.mask_text(item) if isinstance(item, str) else item
                    for item in value
                ]
            else:
                masked[key] = value

        return masked

    def add_masked_value(self, value: Optional[str]):
        if value:
            self._masked_values.add(value)

    def clear_masked_values(self):
        """Clear the set of values to mask (useful for testing)."""
        self._masked_values.clear()


class SecretsMaskingFilter(logging.Filter):
    """Logging filter that masks secrets in log records."""

    def __init__(self, secrets_manager: SecretsManager):
        super().__init__()
        self.secrets_manager = secrets_manager

    def filter(self, record):
        if hasattr(record, 'msg'):
            record.msg = self.secrets_manager.mask_text(str(record.msg))

        if hasattr(record, 'args') and record.args:
            if isinstance(record.args, dict):
                record.args = self.secrets_manager.mask_dict(record.args)
            elif isinstance(record.args, tuple):
                record.args = tuple(
                    self.secrets_manager.mask_text(arg) if isinstance(arg, str) else arg
                    for arg in record.args
                )

        return True


def install_masking(secrets_manager: SecretsManager, logger: Optional[logging.Logger] = None) -> SecretsMaskingFilter:
    """Attach a masking filter to every handler of ``logger`` (root by default)."""
    target = logger or logging.getLogger()
    masking_filter = SecretsMaskingFilter(secrets_manager)
    for handler in target.handlers:
        handler.addFilter(masking_filter)
    return masking_filter
