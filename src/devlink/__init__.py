"""
devlink - link locally checked-out packages into a Composer project

devlink temporarily registers packages found under a development directory
as path repositories of the root project, lets Composer symlink them into
the vendor directory, then restores composer.json and composer.lock.
"""

__version__ = "1.0.0"
__all__ = ["__version__"]
