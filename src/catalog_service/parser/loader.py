"""Safe YAML loader for descriptor and manifest files."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.constructor import SafeConstructor
from ruamel.yaml.error import YAMLError

# ---------------------------------------------------------------------------
# Safety limits
# ---------------------------------------------------------------------------

MAX_DOCUMENT_SIZE = 5_000_000  # 5M characters
MAX_NODE_COUNT = 50_000
MAX_DEPTH = 32


class YAMLSafetyError(Exception):
    """Raised when YAML input violates safety constraints.

    Distinct from parse errors: these indicate potentially malicious input
    (e.g., alias bombs, excessive nesting, oversized documents).
    """


class _TextFloatConstructor(SafeConstructor):
    """Safe constructor that keeps float scalars as their source text.

    Version labels such as `1.10` must not collapse to `1.1`.
    """


_TextFloatConstructor.add_constructor(
    "tag:yaml.org,2002:float",
    lambda constructor, node: constructor.construct_scalar(node),
)


class SafeLoader:
    """YAML loader that returns plain Python data and enforces size limits.

    Aliases are resolved by ruamel.yaml as shared references, so an alias
    bomb shows up as an exploding node count when walked.
    """

    def __init__(self) -> None:
        self._yaml = YAML(typ="safe", pure=True)
        self._yaml.Constructor = _TextFloatConstructor

    # -- safety checks -------------------------------------------------------

    @staticmethod
    def _check_size(content: str) -> None:
        if len(content) > MAX_DOCUMENT_SIZE:
            raise YAMLSafetyError(
                f"YAML document exceeds maximum size "
                f"({len(content):,} chars > {MAX_DOCUMENT_SIZE:,} limit)"
            )

    @staticmethod
    def _check_nodes(data: Any, limit: int = MAX_NODE_COUNT, max_depth: int = MAX_DEPTH) -> None:
        """Post-parse defense-in-depth: bound node count and nesting depth."""
        count = 0
        stack: list[tuple[Any, int]] = [(data, 0)]
        while stack:
            node, depth = stack.pop()
            count += 1
            if count > limit:
                raise YAMLSafetyError(f"YAML document exceeds maximum node count ({limit:,})")
            if depth > max_depth:
                raise YAMLSafetyError(f"YAML document exceeds maximum depth ({max_depth})")
            if isinstance(node, dict):
                stack.extend((v, depth + 1) for v in node.values())
            elif isinstance(node, list):
                stack.extend((v, depth + 1) for v in node)

    # -- public loading API --------------------------------------------------

    def load_string(self, content: str) -> Any:
        """Parse YAML text.  Raises ``YAMLError`` or ``YAMLSafetyError``."""
        self._check_size(content)
        data = self._yaml.load(content)
        if data is None:
            return {}
        self._check_nodes(data)
        return data

    def load_bytes(self, content: bytes) -> Any:
        try:
            text = content.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise YAMLSafetyError(f"YAML document is not valid UTF-8: {exc}") from None
        return self.load_string(text)

    def load(self, path: Path) -> Any:
        with path.open("r", encoding="utf-8") as handle:
            return self.load_string(handle.read())


__all__ = ["MAX_DOCUMENT_SIZE", "SafeLoader", "YAMLError", "YAMLSafetyError"]
