"""Application Remote Call Protocol: chunks, typed data, messages, connections, routers and peers."""

__all__ = ["protocol", "types", "dataobject", "connection", "remote", "peer"]