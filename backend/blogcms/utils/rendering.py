import bleach
import markdown

ALLOWED_TAGS = sorted(
    set(bleach.sanitizer.ALLOWED_TAGS)
    | {
        "p", "br", "hr", "img", "figure", "figcaption",
        "h1", "h2", "h3", "h4", "h5", "h6",
        "pre", "code", "blockquote",
        "table", "thead", "tbody", "tr", "th", "td",
        "del", "sup", "sub",
    }
)

ALLOWED_ATTRIBUTES = {
    **bleach.sanitizer.ALLOWED_ATTRIBUTES,
    "img": ["src", "alt", "title", "width", "height", "loading"],
    "a": ["href", "title", "target", "rel"],
    "code": ["class"],
    "pre": ["class"],
}

ALLOWED_PROTOCOLS = ["http", "https", "mailto"]

MARKDOWN_EXTENSIONS = ["fenced_code", "tables"]


def render_markdown(source: str | None) -> str:
    """
    Render markdown to sanitized HTML.

    Pure and deterministic: the stored body_html is always this function of
    the stored body. Scripts, event-handler attributes and javascript: URLs
    are stripped.
    """
    if not source:
        return ""

    html = markdown.markdown(source, extensions=MARKDOWN_EXTENSIONS)

    return bleach.clean(
        html,
        tags=ALLOWED_TAGS,
        attributes=ALLOWED_ATTRIBUTES,
        protocols=ALLOWED_PROTOCOLS,
        strip=True,
        strip_comments=True,
    )
