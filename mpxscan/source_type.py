from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Callable, Dict, List, Optional


JAVASCRIPT = "javascript"
TYPESCRIPT = "typescript"
TYPESCRIPT_DEFINITION = "typescript_definition"

MODULE = "module"
SCRIPT = "script"
UNAMBIGUOUS = "unambiguous"

STANDARD = "standard"
JSX = "jsx"


class UnknownExtensionError(ValueError):
    """Raised when a language token does not name a known script flavour."""

    def __init__(self, token: str):
        super().__init__(f"Unknown script language: {token!r}")
        self.token = token


@dataclass(frozen=True)
class SourceType:
    language: str = JAVASCRIPT
    module_kind: str = MODULE
    variant: str = STANDARD

    @classmethod
    def mjs(cls) -> "SourceType":
        return cls(JAVASCRIPT, MODULE, STANDARD)

    @classmethod
    def cjs(cls) -> "SourceType":
        return cls(JAVASCRIPT, SCRIPT, STANDARD)

    @classmethod
    def jsx(cls) -> "SourceType":
        return cls(JAVASCRIPT, MODULE, JSX)

    @classmethod
    def ts(cls) -> "SourceType":
        return cls(TYPESCRIPT, MODULE, STANDARD)

    @classmethod
    def tsx(cls) -> "SourceType":
        return cls(TYPESCRIPT, MODULE, JSX)

    @classmethod
    def mts(cls) -> "SourceType":
        return cls(TYPESCRIPT, MODULE, STANDARD)

    @classmethod
    def cts(cls) -> "SourceType":
        return cls(TYPESCRIPT, SCRIPT, STANDARD)

    @classmethod
    def d_ts(cls) -> "SourceType":
        return cls(TYPESCRIPT_DEFINITION, MODULE, STANDARD)

    @property
    def is_javascript(self) -> bool:
        return self.language == JAVASCRIPT

    @property
    def is_typescript(self) -> bool:
        return self.language in (TYPESCRIPT, TYPESCRIPT_DEFINITION)

    @property
    def is_typescript_definition(self) -> bool:
        return self.language == TYPESCRIPT_DEFINITION

    @property
    def is_jsx(self) -> bool:
        return self.variant == JSX

    @property
    def is_module(self) -> bool:
        return self.module_kind == MODULE

    @property
    def is_script(self) -> bool:
        return self.module_kind == SCRIPT

    def with_standard(self, yes: bool) -> "SourceType":
        if yes:
            return replace(self, variant=STANDARD)
        return self

    def with_jsx(self, yes: bool) -> "SourceType":
        if yes:
            return replace(self, variant=JSX)
        return self

    def to_dict(self) -> Dict[str, str]:
        return {
            "language": self.language,
            "module_kind": self.module_kind,
            "variant": self.variant,
        }

    @classmethod
    def from_extension(cls, extension: str) -> "SourceType":
        """Resolve a bare extension token (``ts``, ``tsx``, ``d.ts`` ...).

        Plain JavaScript tokens resolve to the JSX variant, as ``.js`` files
        commonly carry JSX; callers narrow that down themselves.
        """
        try:
            return _EXTENSIONS[extension]
        except KeyError:
            raise UnknownExtensionError(extension) from None


# A resolver maps a language token to a SourceType. Failure is signalled by
# raising UnknownExtensionError or by returning None.
Resolver = Callable[[str], Optional[SourceType]]


_EXTENSIONS: Dict[str, SourceType] = {
    "js": SourceType(JAVASCRIPT, MODULE, JSX),
    "mjs": SourceType(JAVASCRIPT, MODULE, JSX),
    "cjs": SourceType(JAVASCRIPT, SCRIPT, JSX),
    "jsx": SourceType(JAVASCRIPT, MODULE, JSX),
    "ts": SourceType.ts(),
    "mts": SourceType.mts(),
    "cts": SourceType.cts(),
    "tsx": SourceType.tsx(),
    "d.ts": SourceType.d_ts(),
    "d.mts": SourceType.d_ts(),
    "d.cts": SourceType(TYPESCRIPT_DEFINITION, SCRIPT, STANDARD),
}


def known_extensions() -> List[str]:
    return list(_EXTENSIONS)
