from typing import Optional

from tskt.settings import TranslatorSettings
from tskt.syntax import SyntaxKind, SyntaxNode


class IdentifierEscaper:
    """
    Quotes identifiers that would clash with Kotlin keywords or contain
    characters Kotlin does not accept in plain names.
    """

    def __init__(self, settings: Optional[TranslatorSettings] = None) -> None:
        self.settings = settings or TranslatorSettings()

    def needs_escaping(self, text: str) -> bool:
        if text in self.settings.reserved_words:
            return True
        return any(marker in text for marker in self.settings.escape_markers)

    def escape(self, text: str) -> str:
        if self.needs_escaping(text):
            q = self.settings.quote
            return f"{q}{text}{q}"
        return text

    def unquote(self, quoted: str) -> str:
        """Strip the surrounding quote characters of a string literal name."""
        return self.escape(quoted[1:-1])

    def name_text(self, node: SyntaxNode) -> str:
        """
        Escaped name of an identifier-like node. Quoted names (``"foo"``)
        lose their quotes before escaping.
        """
        if node.kind == SyntaxKind.STRING:
            return self.unquote(node.text)
        return self.escape(node.text)
