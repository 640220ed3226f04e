from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterator

import bson
import yaml

from ..errors import InvalidArgumentError, ProviderError
from .file_io import atomic_write_bytes, read_bytes
from .interfaces import DocumentProvider
from .locks import PROVIDER_LOCKS
from .paths import resolve_database_path

logger = logging.getLogger(__name__)


def _non_str_keys(node: Any) -> Iterator[Any]:
    # Documents map strings to values at every depth; YAML can decode 1: or true: as int/bool keys.
    if isinstance(node, dict):
        for key, value in node.items():
            if not isinstance(key, str):
                yield key
            yield from _non_str_keys(value)
    elif isinstance(node, list):
        for item in node:
            yield from _non_str_keys(item)


class DiskDocumentProvider(DocumentProvider):
    """
    Stores a single document on disk at a fixed path.

    - Returns an empty dict when the file is missing or empty.
    - Raises ProviderError when the file cannot be decoded, its root is not a mapping,
      or any mapping at any depth has a non-string key.
    - Writes atomically.

    Subclasses only choose the encoding.
    """

    format = ""

    def __init__(self, path: str | Path | None = None):
        self._path = resolve_database_path(path, self.format)

    @property
    def path(self) -> Path:
        return self._path

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self._path)!r})"

    def encode(self, doc: dict[str, Any]) -> bytes:
        raise NotImplementedError

    def decode(self, raw: bytes) -> Any:
        raise NotImplementedError

    def load(self) -> dict[str, Any]:
        with PROVIDER_LOCKS.locked(self._path):
            try:
                raw = read_bytes(self._path)
            except OSError as e:
                logger.warning("LOAD: failed to read %s: %r", self._path, e)
                raise ProviderError(f"cannot read {self._path}") from e
            if raw is None:
                return {}
            try:
                doc = self.decode(raw)
            except Exception as e:
                logger.warning("LOAD: failed to decode %s as %s: %r", self._path, self.format, e)
                raise ProviderError(f"{self._path} is not valid {self.format}") from e
        if doc is None:
            return {}
        if not isinstance(doc, dict):
            raise ProviderError(f"{self._path} does not hold a mapping at its root")
        for bad in _non_str_keys(doc):
            logger.warning("LOAD: %s holds a non-string key %r", self._path, bad)
            raise ProviderError(f"{self._path} holds a non-string key {bad!r}")
        return doc

    def write(self, doc: dict[str, Any]) -> None:
        try:
            payload = self.encode(doc)
        except Exception as e:
            raise ProviderError(f"cannot encode document as {self.format}") from e
        with PROVIDER_LOCKS.locked(self._path):
            try:
                atomic_write_bytes(self._path, payload)
            except OSError as e:
                logger.warning("WRITE: failed to write %s: %r", self._path, e)
                raise ProviderError(f"cannot write {self._path}") from e


class JSONProvider(DiskDocumentProvider):
    format = "json"

    def __init__(self, path: str | Path | None = None, spaces: int = 2):
        super().__init__(path)
        self.spaces = spaces

    def encode(self, doc: dict[str, Any]) -> bytes:
        # Key order is part of the document; never sort.
        text = json.dumps(doc, indent=self.spaces or None, ensure_ascii=False)
        return (text + "\n").encode("utf-8")

    def decode(self, raw: bytes) -> Any:
        return json.loads(raw.decode("utf-8"))


class YAMLProvider(DiskDocumentProvider):
    format = "yaml"

    def encode(self, doc: dict[str, Any]) -> bytes:
        text = yaml.safe_dump(doc, sort_keys=False, allow_unicode=True, default_flow_style=False)
        return text.encode("utf-8")

    def decode(self, raw: bytes) -> Any:
        return yaml.safe_load(raw.decode("utf-8"))


class BSONProvider(DiskDocumentProvider):
    format = "bson"

    def encode(self, doc: dict[str, Any]) -> bytes:
        return bson.encode(doc)

    def decode(self, raw: bytes) -> Any:
        return bson.decode(raw)


PROVIDERS: dict[str, type[DiskDocumentProvider]] = {
    "json": JSONProvider,
    "yaml": YAMLProvider,
    "bson": BSONProvider,
}


def provider_for(fmt: str, path: str | Path | None = None, *, spaces: int = 2) -> DiskDocumentProvider:
    cls = PROVIDERS.get(fmt.lower())
    if cls is None:
        raise InvalidArgumentError(f"unknown format {fmt!r}, expected one of {sorted(PROVIDERS)}")
    if cls is JSONProvider:
        provider = JSONProvider(path, spaces=spaces)
    else:
        provider = cls(path)
    logger.info("Using %r", provider)
    return provider
