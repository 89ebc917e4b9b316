"""Small helpers shared by the toolkit."""

from .cancellation import CancellationToken
from .privileges import is_elevated

__all__ = ["CancellationToken", "is_elevated"]
