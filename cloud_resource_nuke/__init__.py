"""Bulk discovery and deletion of cloud resources across every enabled region."""

__version__ = "1.0.0"
__description__ = "Destroy transient cloud resources in test accounts"
