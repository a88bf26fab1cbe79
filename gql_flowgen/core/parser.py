"""GraphQL schema loading using graphql-core.

Builds a GraphQLSchema from SDL files, a directory of SDL files, an
archive of SDL files, or a live endpoint via introspection.
"""

import logging
import os
import shutil
import tarfile
import tempfile
import zipfile
from pathlib import Path
from typing import Any

import httpx
from graphql import (
    GraphQLError,
    GraphQLSchema,
    build_ast_schema,
    build_client_schema,
    get_introspection_query,
    parse,
)

logger = logging.getLogger(__name__)

SCHEMA_EXTENSIONS = (".graphql", ".graphqls", ".gql")
ARCHIVE_EXTENSIONS = (".zip", ".tar.gz", ".tgz")


class SchemaLoadError(Exception):
    """Raised when a schema source cannot be read or built."""


def extract_archive(archive_path: Path) -> str:
    """Extract archive to temp directory. Returns path to extracted content."""
    is_zip = archive_path.suffix == ".zip"
    if not is_zip and not archive_path.name.endswith((".tar.gz", ".tgz")):
        raise SchemaLoadError(f"Unsupported archive format: {archive_path.suffix}")

    temp_dir = tempfile.mkdtemp()
    try:
        if is_zip:
            with zipfile.ZipFile(archive_path, "r") as zip_ref:
                zip_ref.extractall(temp_dir)
        else:
            # "data" rejects absolute paths, ".." members and links leaving temp_dir
            with tarfile.open(archive_path, "r:gz") as tar_ref:
                tar_ref.extractall(temp_dir, filter="data")
    except (tarfile.TarError, zipfile.BadZipFile) as e:
        shutil.rmtree(temp_dir)
        raise SchemaLoadError(f"Cannot extract archive {archive_path}: {e}") from e
    return temp_dir


def is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


class SchemaLoader:
    """Loads a GraphQL schema from a path or URL.

    Examples:
        SchemaLoader("./schema.graphql").load()
        SchemaLoader("./schema/").load()
        SchemaLoader("./schema.tgz").load()
        SchemaLoader("https://api.example.com/graphql",
                     headers={"Authorization": "Bearer ..."}).load()
    """

    def __init__(
        self,
        source: str,
        headers: dict[str, str] | None = None,
        timeout: float = 30.0,
        client: httpx.Client | None = None,
    ):
        """Initialize the loader.

        Args:
            source: Schema file, directory, archive, or http(s) endpoint
            headers: Extra HTTP headers for introspection requests
            timeout: Request timeout in seconds
            client: Optional preconfigured httpx client (used as-is, not closed)
        """
        self.source = source
        self.headers = headers or {}
        self.timeout = timeout
        self._client = client
        self.schema_files: list[str] = []

    def load(self) -> GraphQLSchema:
        """Load and build the schema.

        Raises:
            SchemaLoadError: If the source cannot be read or is not a valid schema
        """
        if is_url(self.source):
            return self._load_from_url()

        path = Path(self.source)
        if not path.exists():
            raise SchemaLoadError(f"Schema source not found: {self.source}")

        if path.is_file() and path.name.lower().endswith(ARCHIVE_EXTENSIONS):
            temp_dir = extract_archive(path)
            try:
                logger.debug("Extracted %s to %s", path.name, temp_dir)
                return self._load_from_path(Path(temp_dir))
            finally:
                shutil.rmtree(temp_dir)
        return self._load_from_path(path)

    def _collect_schema_files(self, path: Path) -> list[str]:
        """Collect all schema files from path."""
        files = []
        if path.is_file():
            files.append(str(path))
        else:
            for root, _, filenames in os.walk(path):
                for filename in filenames:
                    if filename.endswith(SCHEMA_EXTENSIONS):
                        files.append(os.path.join(root, filename))
        return sorted(files)

    def _load_from_path(self, path: Path) -> GraphQLSchema:
        self.schema_files = self._collect_schema_files(path)
        if not self.schema_files:
            raise SchemaLoadError(f"No schema files found in {path}")

        sources = []
        for file_path in self.schema_files:
            logger.debug("Reading schema file %s", file_path)
            with open(file_path) as f:
                sources.append(f.read())

        try:
            document = parse("\n".join(sources))
            return build_ast_schema(document)
        except (GraphQLError, TypeError) as e:
            raise SchemaLoadError(f"Invalid schema in {self.source}: {e}") from e

    def _introspect(self, client: httpx.Client) -> dict[str, Any]:
        response = client.post(self.source, json={"query": get_introspection_query()})
        response.raise_for_status()
        result = response.json()

        if "errors" in result:
            error_messages = "; ".join(e.get("message", str(e)) for e in result["errors"])
            raise SchemaLoadError(f"Introspection failed: {error_messages}")
        if not result.get("data"):
            raise SchemaLoadError("Introspection response has no data")
        return result["data"]

    def _load_from_url(self) -> GraphQLSchema:
        logger.debug("Introspecting %s", self.source)
        headers = {"Content-Type": "application/json"}
        headers.update(self.headers)
        try:
            if self._client is not None:
                data = self._introspect(self._client)
            else:
                with httpx.Client(timeout=self.timeout, headers=headers) as client:
                    data = self._introspect(client)
        except httpx.HTTPError as e:
            raise SchemaLoadError(f"Cannot fetch schema from {self.source}: {e}") from e

        try:
            return build_client_schema(data)
        except (GraphQLError, TypeError) as e:
            raise SchemaLoadError(f"Invalid introspection result from {self.source}: {e}") from e


def load_schema(source: str, **kwargs) -> GraphQLSchema:
    """Convenience wrapper around SchemaLoader(source, **kwargs).load()."""
    return SchemaLoader(source, **kwargs).load()
