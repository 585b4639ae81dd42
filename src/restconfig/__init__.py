"""
Restconfig - REST client configuration name resolution.

Lets one REST client setting be written under any of its accepted
spellings (fully qualified name, simple name, config key, MicroProfile
``/mp-rest/`` names) and resolves all of them to one value.
"""

__version__ = "0.1.0"
