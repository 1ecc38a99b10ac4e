"""Configuration management for Fileserve.

Supports TOML configuration format with auto-discovery.
"""

import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Self

CONFIG_FILENAME = "fileserve.toml"
DEFAULT_LISTEN_ADDR = ":5000"
DEFAULT_INDEX_FILE = "index.html"


@dataclass(frozen=True)
class ListenAddress:
    """Network address to bind, parsed from "[host]:port"."""

    host: str
    port: int

    @classmethod
    def parse(cls, value: str) -> Self:
        """Parse a listen address.

        Accepted forms: ":5000", "127.0.0.1:5000", "localhost:0", "[::1]:5000".
        An empty host means all interfaces.

        Args:
            value: Address string

        Returns:
            ListenAddress instance

        Raises:
            ValueError: If the address is malformed or the port is out of range
        """
        host, sep, port_str = value.rpartition(":")
        if not sep:
            raise ValueError(f"Invalid listen address {value!r}: missing port")

        if host.startswith("["):
            if not host.endswith("]") or len(host) < 3:
                raise ValueError(f"Invalid listen address {value!r}: bad IPv6 host")
            host = host[1:-1]
        elif ":" in host:
            raise ValueError(
                f"Invalid listen address {value!r}: IPv6 hosts must be bracketed",
            )

        if not (port_str.isascii() and port_str.isdigit()):
            raise ValueError(f"Invalid listen address {value!r}: bad port")
        port = int(port_str)
        if port > 65535:
            raise ValueError(f"Invalid listen address {value!r}: port out of range")

        return cls(host=host, port=port)

    @property
    def bind_host(self) -> str | None:
        """Host for the listener; None binds all interfaces."""
        return self.host or None

    def __str__(self) -> str:
        host = f"[{self.host}]" if ":" in self.host else self.host
        return f"{host}:{self.port}"


@dataclass
class ServerConfig:
    """Server configuration."""

    listen_addr: ListenAddress = field(
        default_factory=lambda: ListenAddress.parse(DEFAULT_LISTEN_ADDR),
    )


@dataclass
class StaticConfig:
    """Static file configuration."""

    root_dir: Path = field(default_factory=lambda: Path("static"))
    index_file: str = DEFAULT_INDEX_FILE


@dataclass
class Config:
    """Application configuration."""

    server: ServerConfig
    static: StaticConfig
    config_path: Path | None = None

    @classmethod
    def load(cls, config_path: Path | None = None) -> Self:
        """Load configuration from file.

        If config_path is provided, loads from that file.
        Otherwise, searches for fileserve.toml in current directory and parents.

        Args:
            config_path: Optional explicit path to config file

        Returns:
            Config instance with defaults for missing sections

        Raises:
            FileNotFoundError: If explicit config_path doesn't exist
            ValueError: If configuration is invalid
        """
        if config_path is not None:
            if not config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {config_path}")
            return cls._load_from_file(config_path)

        discovered_path = cls._discover_config()
        if discovered_path is None:
            return cls._default()

        return cls._load_from_file(discovered_path)

    @classmethod
    def _discover_config(cls) -> Path | None:
        """Search for config file in current directory and parents.

        Returns:
            Path to config file or None if not found
        """
        current = Path.cwd()
        while True:
            candidate = current / CONFIG_FILENAME
            if candidate.exists():
                return candidate
            parent = current.parent
            if parent == current:
                return None
            current = parent

    @classmethod
    def _default(cls) -> Self:
        """Create config with all defaults."""
        return cls(server=ServerConfig(), static=StaticConfig())

    @classmethod
    def _load_from_file(cls, path: Path) -> Self:
        """Load configuration from a specific file.

        Args:
            path: Path to TOML configuration file

        Returns:
            Config instance

        Raises:
            ValueError: If configuration is invalid
        """
        with path.open("rb") as f:
            try:
                data = tomllib.load(f)
            except tomllib.TOMLDecodeError as e:
                raise ValueError(f"Invalid TOML in {path}: {e}") from e

        config_dir = path.parent

        server = cls._parse_server(data.get("server"))
        static = cls._parse_static(data.get("static"), config_dir)

        return cls(server=server, static=static, config_path=path)

    @classmethod
    def _parse_server(cls, data: object) -> ServerConfig:
        """Parse server configuration section.

        Args:
            data: Raw server section data

        Returns:
            ServerConfig instance
        """
        if data is None:
            return ServerConfig()

        if not isinstance(data, dict):
            raise ValueError("server section must be a dictionary")

        listen_addr = data.get("listen_addr", DEFAULT_LISTEN_ADDR)
        if not isinstance(listen_addr, str):
            raise ValueError("server.listen_addr must be a string")

        return ServerConfig(listen_addr=ListenAddress.parse(listen_addr))

    @classmethod
    def _parse_static(cls, data: object, config_dir: Path) -> StaticConfig:
        """Parse static configuration section.

        Args:
            data: Raw static section data
            config_dir: Directory containing config file (for relative paths)

        Returns:
            StaticConfig instance
        """
        if data is None:
            return StaticConfig(root_dir=config_dir / "static")

        if not isinstance(data, dict):
            raise ValueError("static section must be a dictionary")

        root_dir = data.get("root_dir", "static")
        if not isinstance(root_dir, str):
            raise ValueError("static.root_dir must be a string")

        index_file = data.get("index_file", DEFAULT_INDEX_FILE)
        if not isinstance(index_file, str):
            raise ValueError("static.index_file must be a string")
        _validate_index_file(index_file)

        return StaticConfig(root_dir=config_dir / root_dir, index_file=index_file)

    def with_overrides(
        self,
        *,
        listen_addr: str | None = None,
        root_dir: Path | None = None,
        index_file: str | None = None,
    ) -> Self:
        """Create a new Config with CLI overrides applied.

        Only non-None values override the existing config. The original
        Config is not modified.

        Args:
            listen_addr: Override server.listen_addr ("[host]:port")
            root_dir: Override static.root_dir
            index_file: Override static.index_file

        Returns:
            New Config instance with overrides applied

        Raises:
            ValueError: If an override value is invalid
        """
        server = self.server
        if listen_addr is not None:
            server = replace(self.server, listen_addr=ListenAddress.parse(listen_addr))

        static = self.static
        if root_dir is not None or index_file is not None:
            if index_file is not None:
                _validate_index_file(index_file)
            static = replace(
                self.static,
                root_dir=root_dir if root_dir is not None else self.static.root_dir,
                index_file=index_file if index_file is not None else self.static.index_file,
            )

        return replace(self, server=server, static=static)


def _validate_index_file(index_file: str) -> None:
    """Check that an index file name is a plain file name.

    Raises:
        ValueError: If the name is empty or contains a path separator
    """
    if index_file in ("", ".", "..") or "/" in index_file or "\\" in index_file:
        raise ValueError(f"Invalid index file name: {index_file!r}")
