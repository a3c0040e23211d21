"""Built-in authentication plugins.

* :mod:`oktakit.plugins.ssws` -- Okta API token (``SSWS``) auth.
* :mod:`oktakit.plugins.bearer` -- OAuth 2.0 access token auth.
"""
