"""
HTML sanitizer for author-supplied rich text.
Drops script-capable elements wholesale, then uses Bleach to whitelist the
remaining tags/attributes and prevent XSS. Inline styles are filtered per
declaration through the bleach CSS sanitizer.
"""

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, List

import bleach
import tinycss2
from bleach.css_sanitizer import CSSSanitizer
from bs4 import BeautifulSoup, Comment, NavigableString

from ..errors import UnknownProfileError


# Elements removed together with everything inside them. Bleach only strips
# the tags themselves, which would leave script bodies behind as text.
SCRIPT_CAPABLE_TAGS: FrozenSet[str] = frozenset(
    {
        "script",
        "style",
        "iframe",
        "object",
        "embed",
        "noscript",
        "template",
        "frame",
        "frameset",
        "applet",
        "base",
        "meta",
        "link",
    }
)

# Standard document-content markup
HTML_TAGS: Iterable[str] = {
    "a",
    "abbr",
    "acronym",
    "address",
    "article",
    "aside",
    "b",
    "bdi",
    "bdo",
    "blockquote",
    "br",
    "caption",
    "cite",
    "code",
    "col",
    "colgroup",
    "dd",
    "del",
    "details",
    "dfn",
    "div",
    "dl",
    "dt",
    "em",
    "figcaption",
    "figure",
    "footer",
    "h1",
    "h2",
    "h3",
    "h4",
    "h5",
    "h6",
    "header",
    "hr",
    "i",
    "img",
    "ins",
    "kbd",
    "li",
    "main",
    "mark",
    "nav",
    "ol",
    "p",
    "pre",
    "q",
    "s",
    "samp",
    "section",
    "small",
    "span",
    "strong",
    "sub",
    "summary",
    "sup",
    "table",
    "tbody",
    "td",
    "tfoot",
    "th",
    "thead",
    "time",
    "tr",
    "u",
    "ul",
    "var",
}

HTML_GLOBAL_ATTRIBUTES = ["class", "id", "title", "lang", "dir", "style"]

HTML_ATTRIBUTES: Dict[str, List[str]] = {
    "*": HTML_GLOBAL_ATTRIBUTES,
    "a": HTML_GLOBAL_ATTRIBUTES + ["href", "rel", "target"],
    "img": HTML_GLOBAL_ATTRIBUTES + ["src", "alt", "width", "height"],
    "ol": HTML_GLOBAL_ATTRIBUTES + ["start", "type", "reversed"],
    "li": HTML_GLOBAL_ATTRIBUTES + ["value"],
    "th": HTML_GLOBAL_ATTRIBUTES + ["colspan", "rowspan", "scope"],
    "td": HTML_GLOBAL_ATTRIBUTES + ["colspan", "rowspan"],
    "col": HTML_GLOBAL_ATTRIBUTES + ["span"],
    "colgroup": HTML_GLOBAL_ATTRIBUTES + ["span"],
    "time": HTML_GLOBAL_ATTRIBUTES + ["datetime"],
    "details": HTML_GLOBAL_ATTRIBUTES + ["open"],
    "blockquote": HTML_GLOBAL_ATTRIBUTES + ["cite"],
    "q": HTML_GLOBAL_ATTRIBUTES + ["cite"],
    "del": HTML_GLOBAL_ATTRIBUTES + ["cite", "datetime"],
    "ins": HTML_GLOBAL_ATTRIBUTES + ["cite", "datetime"],
}

ALLOWED_PROTOCOLS = ["http", "https", "mailto", "tel"]

# Inline style properties kept on author markup; nothing that loads resources
ALLOWED_CSS_PROPERTIES: FrozenSet[str] = frozenset(
    {
        "color",
        "background-color",
        "font-family",
        "font-size",
        "font-style",
        "font-weight",
        "letter-spacing",
        "line-height",
        "text-align",
        "text-decoration",
        "text-indent",
        "text-transform",
        "white-space",
        "vertical-align",
        "margin",
        "margin-top",
        "margin-right",
        "margin-bottom",
        "margin-left",
        "padding",
        "padding-top",
        "padding-right",
        "padding-bottom",
        "padding-left",
        "border",
        "border-top",
        "border-right",
        "border-bottom",
        "border-left",
        "border-color",
        "border-style",
        "border-width",
        "border-radius",
        "border-collapse",
        "width",
        "height",
        "max-width",
        "min-width",
        "list-style-type",
    }
)

# Value functions that fetch or evaluate something
UNSAFE_CSS_FUNCTIONS: FrozenSet[str] = frozenset(
    {"url", "expression", "image", "image-set", "-webkit-image-set", "element", "-moz-element"}
)

# Children each table part may hold; anything else is moved in front of the table
TABLE_CONTENT_MODEL: Dict[str, FrozenSet[str]] = {
    "table": frozenset({"caption", "col", "colgroup", "thead", "tbody", "tfoot", "tr"}),
    "thead": frozenset({"tr"}),
    "tbody": frozenset({"tr"}),
    "tfoot": frozenset({"tr"}),
    "tr": frozenset({"td", "th"}),
}


def _has_unsafe_value(tokens) -> bool:
    for token in tokens:
        if token.type in ("url", "error"):
            return True
        if token.type == "function":
            if token.lower_name in UNSAFE_CSS_FUNCTIONS or _has_unsafe_value(token.arguments):
                return True
        elif token.type.endswith("block"):
            if _has_unsafe_value(token.content):
                return True
        elif token.type == "string" and "javascript:" in token.value.lower():
            return True
    return False


class RichTextCSSSanitizer(CSSSanitizer):
    """
    Bleach CSS sanitizer that also checks declaration values.

    Bleach only filters on property names; a declaration is dropped here as
    well when its value loads a resource or evaluates an expression.
    """

    def sanitize_css(self, style: str) -> str:
        kept = []
        for token in tinycss2.parse_declaration_list(style, skip_comments=True, skip_whitespace=True):
            if token.type != "declaration":
                continue
            if token.lower_name not in self.allowed_css_properties:
                continue
            if _has_unsafe_value(token.value):
                continue
            kept.append(token.serialize().strip())
        return "; ".join(kept)


@dataclass(frozen=True)
class SanitizerProfile:
    """A named rule set deciding which markup survives sanitization."""

    name: str
    tags: FrozenSet[str]
    attributes: Dict[str, List[str]] = field(default_factory=dict)
    protocols: List[str] = field(default_factory=lambda: list(ALLOWED_PROTOCOLS))
    drop_content_tags: FrozenSet[str] = SCRIPT_CAPABLE_TAGS
    css_properties: FrozenSet[str] = frozenset()


PROFILES: Dict[str, SanitizerProfile] = {
    "html": SanitizerProfile(
        name="html",
        tags=frozenset(HTML_TAGS),
        attributes=HTML_ATTRIBUTES,
        css_properties=ALLOWED_CSS_PROPERTIES,
    ),
    "text": SanitizerProfile(name="text", tags=frozenset()),
}

DEFAULT_PROFILE = "html"


def get_profile(name: str) -> SanitizerProfile:
    """Look up a sanitization profile by name."""
    try:
        return PROFILES[name]
    except KeyError:
        raise UnknownProfileError(
            f"Unknown sanitization profile '{name}'. Expected one of: {', '.join(sorted(PROFILES))}"
        ) from None


def foster_parent_table_content(soup: BeautifulSoup) -> None:
    """
    Move content that cannot live inside a table part out in front of its table.

    Browsers do the same while parsing; doing it up front keeps the text of
    e.g. ``<table><p>x</p></table>`` instead of losing it in the whitelist pass.
    """
    for part in soup.find_all(list(TABLE_CONTENT_MODEL)):
        table = part if part.name == "table" else part.find_parent("table")
        if table is None:
            continue
        allowed = TABLE_CONTENT_MODEL[part.name]
        for child in list(part.children):
            if isinstance(child, Comment):
                continue
            if isinstance(child, NavigableString):
                if not child.strip():
                    continue
            elif child.name in allowed:
                continue
            table.insert_before(child.extract())


def drop_script_content(html: str, tags: Iterable[str] = SCRIPT_CAPABLE_TAGS) -> str:
    """Remove script-capable elements along with their content."""
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup.find_all(list(tags)):
        # Nested matches go away with their ancestor
        if not tag.decomposed:
            tag.decompose()
    foster_parent_table_content(soup)
    return soup.decode(formatter="html")


def build_cleaner(profile: SanitizerProfile) -> bleach.Cleaner:
    """Build a Bleach cleaner for a profile."""
    return bleach.Cleaner(
        tags=profile.tags,
        attributes=profile.attributes,
        protocols=profile.protocols,
        strip=True,
        strip_comments=True,
        css_sanitizer=RichTextCSSSanitizer(
            allowed_css_properties=profile.css_properties,
            allowed_svg_properties=frozenset(),
        ),
    )


def clean_with(cleaner: bleach.Cleaner, profile: SanitizerProfile, html: str) -> str:
    """Run the two sanitization passes with an already built cleaner."""
    if not html:
        return ""
    return cleaner.clean(drop_script_content(html, profile.drop_content_tags))


def sanitize_html(html: str, profile: str = DEFAULT_PROFILE) -> str:
    """Sanitize author-supplied HTML to prevent XSS."""
    selected = get_profile(profile)
    return clean_with(build_cleaner(selected), selected, html)
