"""phpkit: tool resolution and launch configuration for PHP editor tooling."""

from .extension import PhpExtension

__all__ = ["PhpExtension"]

__version__ = "0.1.0"
