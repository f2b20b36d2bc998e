"""
cineVault
~~~~~~~~~
Data-access core of the CineVault movie / TV discovery app:

* metadata.gateway        – cached, paced TMDb / OMDb access
* metadata.core.watchlist – the user's tracked list, persisted locally
"""

__version__ = "0.1.0"
