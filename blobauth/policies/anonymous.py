"""Pass-through credential policy for SAS URLs and public containers."""

from __future__ import annotations

from blobauth.policies.credential import CredentialPolicy


class AnonymousCredentialPolicy(CredentialPolicy):
    """Forwards requests without adding an ``Authorization`` header."""
