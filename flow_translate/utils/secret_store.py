"""
Default secret store

Host applications that keep API tokens encrypted pass their own SecretStore to
the translation core. Command-line runs read the token from the environment
or a flag, so it is already plaintext.
"""


class PlaintextSecretStore:
    """SecretStore that returns the stored secret unchanged."""

    async def decrypt(self, secret: str) -> str:
        return secret or ''
