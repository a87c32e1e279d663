from enum import Enum
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Grammar(str, Enum):
    TYPESCRIPT = "typescript"
    TSX = "tsx"


def _default_reserved_words() -> set[str]:
    return {
        "val",
        "var",
        "is",
        "as",
        "trait",
        "package",
        "object",
        "when",
        "type",
        "fun",
        "in",
        "This",
    }


class TranslatorSettings(BaseSettings):
    """Settings for translating TypeScript declarations."""

    model_config = SettingsConfigDict(env_prefix="TSKT_")

    reserved_words: set[str] = Field(
        default_factory=_default_reserved_words,
        description=(
            "Identifiers that collide with Kotlin keywords and must be quoted "
            "when used as parameter or member names."
        ),
    )
    escape_markers: set[str] = Field(
        default_factory=lambda: {"$"},
        description="Characters that force quoting of an identifier when present.",
    )
    quote: str = Field(
        default="`",
        description="Delimiter wrapped around escaped identifiers.",
    )
    grammar: Grammar = Field(
        default=Grammar.TYPESCRIPT,
        description='The tree-sitter grammar used to parse sources ("typescript" or "tsx").',
    )


def load_settings(
    env_prefix: Optional[str] = None,
    env_file: Optional[str] = None,
    toml_file: Optional[str] = None,
    json_file: Optional[str] = None,
    **kwargs,
) -> TranslatorSettings:
    config_dict = SettingsConfigDict(
        env_prefix=env_prefix if env_prefix is not None else "TSKT_",
        env_file=env_file,
        toml_file=toml_file,
        json_file=json_file,
    )

    class Settings(TranslatorSettings):
        model_config = config_dict

    return Settings(**kwargs)
