"""Light markdown rendering for bot replies."""

import html
import re

_CODE_BLOCK = re.compile(r"```(\w*)\n?([\s\S]*?)```")
_INLINE_CODE = re.compile(r"`([^`]+)`")
_BOLD = re.compile(r"\*\*(.+?)\*\*|__(.+?)__")
_ITALIC = re.compile(r"\*([^*\n]+)\*|(?<!\w)_([^_\n]+)_(?!\w)")
_LINK = re.compile(r"\[([^\]]+)\]\((https?://[^)\s\"']+)\)")
_BULLET = re.compile(r"^[-*]\s+")
_NUMBERED = re.compile(r"^\d+\.\s+")
_PLACEHOLDER = re.compile(r"\x00(\d+)\x00")

_LIST_TAGS = {
    "ul": '<ul class="list-disc list-inside my-2 space-y-1">',
    "ol": '<ol class="list-decimal list-inside my-2 space-y-1">',
}


def _render_lists(text: str) -> str:
    result: list[str] = []
    open_tag: str | None = None
    for line in text.split("\n"):
        stripped = line.strip()
        if _BULLET.match(stripped):
            tag, item = "ul", _BULLET.sub("", stripped)
        elif _NUMBERED.match(stripped):
            tag, item = "ol", _NUMBERED.sub("", stripped)
        else:
            tag, item = None, line

        if open_tag and tag != open_tag:
            result.append(f"</{open_tag}>")
            open_tag = None
        if tag and open_tag is None:
            result.append(_LIST_TAGS[tag])
            open_tag = tag
        result.append(f"<li>{item}</li>" if tag else item)

    if open_tag:
        result.append(f"</{open_tag}>")
    return "\n".join(result)


def markdown_to_html(text: str) -> str:
    """Convert markdown to HTML for chat display.

    Supports: bold, italic, inline code, code blocks, links, lists.
    Input is HTML-escaped first, quotes included, so model output cannot
    inject tags or break out of an attribute. Code is set aside before the
    other passes and put back last, so its contents stay literal.
    """
    text = html.escape(text.replace("\x00", ""))
    code: list[str] = []

    def stash(rendered: str) -> str:
        code.append(rendered)
        return f"\x00{len(code) - 1}\x00"

    text = _CODE_BLOCK.sub(
        lambda m: stash(
            '<pre class="bg-gray-800 text-gray-100 rounded-lg p-3 my-2 overflow-x-auto text-xs">'
            f"<code>{m.group(2)}</code></pre>"
        ),
        text,
    )
    text = _INLINE_CODE.sub(
        lambda m: stash(
            '<code class="bg-gray-200 text-pink-600 px-1.5 py-0.5 rounded text-xs">'
            f"{m.group(1)}</code>"
        ),
        text,
    )
    text = _render_lists(text)
    text = _BOLD.sub(lambda m: f"<strong>{m.group(1) or m.group(2)}</strong>", text)
    text = _ITALIC.sub(lambda m: f"<em>{m.group(1) or m.group(2)}</em>", text)
    text = _LINK.sub(
        r'<a href="\2" class="text-blue-600 underline" target="_blank">\1</a>',
        text,
    )
    text = text.replace("\n", "<br>")

    return _PLACEHOLDER.sub(lambda m: code[int(m.group(1))], text)


def plain_to_html(text: str) -> str:
    """Escape user or system text, keeping line breaks."""
    return html.escape(text, quote=False).replace("\n", "<br>")
