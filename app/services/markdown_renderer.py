import logging

import markdown
from bs4 import BeautifulSoup
from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

logger = logging.getLogger(__name__)

LANGUAGE_PREFIX = "language-"
MERMAID_LANGUAGE = "mermaid"


class MarkdownRenderer:
    """
    Render a post body to an HTML fragment.
    Fenced code is highlighted with Pygments, headings get ids wrapped in a
    self-link, and ```mermaid blocks become <div class="mermaid"> for the
    client-side diagram script.
    """

    def __init__(self):
        self._formatter = HtmlFormatter(nowrap=True)

    def render(self, content: str) -> str:
        md = markdown.Markdown(
            extensions=["fenced_code", "tables", "toc"],
            extension_configs={
                "toc": {"anchorlink": True, "anchorlink_class": "anchor-link"}
            },
            output_format="html5",
        )
        html = md.convert(content or "")
        return self._process_code_blocks(html)

    def _process_code_blocks(self, html: str) -> str:
        soup = BeautifulSoup(html, "html.parser")

        for pre in soup.find_all("pre"):
            code = pre.find("code")
            if code is None:
                continue
            language = _code_language(code.get("class") or [])
            if not language:
                continue

            source = code.get_text()
            if language == MERMAID_LANGUAGE:
                diagram = soup.new_tag("div", attrs={"class": "mermaid"})
                diagram.string = source.strip()
                pre.replace_with(diagram)
                continue

            highlighted = self._highlight(source, language)
            if highlighted is None:
                continue
            code.clear()
            code.append(BeautifulSoup(highlighted, "html.parser"))
            code["class"] = [*code.get("class", []), "highlight"]

        return str(soup)

    def _highlight(self, source: str, language: str):
        try:
            lexer = get_lexer_by_name(language)
        except ClassNotFound:
            logger.debug(f"No lexer for code block language {language!r}")
            return None
        return highlight(source, lexer, self._formatter)


def _code_language(classes) -> str:
    for cls in classes:
        if cls.startswith(LANGUAGE_PREFIX):
            return cls[len(LANGUAGE_PREFIX) :].lower()
    return ""
