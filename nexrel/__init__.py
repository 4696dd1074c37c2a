"""nexrel: package, deploy and tag a release against a Nexus repository."""

__version__ = "0.3.0"
