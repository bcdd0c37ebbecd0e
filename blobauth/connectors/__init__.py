from blobauth.connectors.httpx_sender import HttpxSender

__all__ = ["HttpxSender"]
