from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List


@dataclass
class Settings:
    host: str = "127.0.0.1"
    port: int = 8080
    # Upper bound for documents accepted over HTTP
    max_document_bytes: int = 5 * 1024 * 1024
    log_level: str = "INFO"
    # Suffixes picked up when the CLI walks a directory
    extensions: List[str] = field(default_factory=lambda: [".mpx"])

    @classmethod
    def from_env(cls) -> "Settings":
        def _int(env, default):
            try:
                return int(os.getenv(env, str(default)))
            except Exception:
                return default

        host = os.getenv("MPXSCAN_HOST", "127.0.0.1").strip() or "127.0.0.1"
        port = _int("MPXSCAN_PORT", 8080)
        max_document_bytes = max(1024, _int("MPXSCAN_MAX_DOCUMENT_BYTES", 5 * 1024 * 1024))
        log_level = os.getenv("MPXSCAN_LOG_LEVEL", "INFO").strip().upper()
        if log_level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            log_level = "INFO"
        extensions = []
        for ext in os.getenv("MPXSCAN_EXTENSIONS", ".mpx").split(","):
            ext = ext.strip().lower()
            if not ext:
                continue
            if not ext.startswith("."):
                ext = "." + ext
            extensions.append(ext)

        return cls(
            host=host,
            port=port,
            max_document_bytes=max_document_bytes,
            log_level=log_level,
            extensions=extensions or [".mpx"],
        )
