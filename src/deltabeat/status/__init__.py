from deltabeat.status.server import StatusServer

__all__ = ["StatusServer"]
