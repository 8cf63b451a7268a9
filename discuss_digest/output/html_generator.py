from datetime import datetime, tzinfo
from html import escape
from typing import List

from discuss_digest.models.item import DiscussItem
from discuss_digest.utils.timestamps import format_display_timestamp

SUMMARY_MAX_CHARS = 200

_STYLE = """
        body { font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Arial, sans-serif; line-height: 1.6; color: #333; max-width: 800px; margin: 0 auto; padding: 20px; background-color: #f5f5f5; }
        .container { background-color: white; padding: 30px; border-radius: 8px; box-shadow: 0 2px 4px rgba(0,0,0,0.1); }
        h1 { color: #FFA116; border-bottom: 3px solid #FFA116; padding-bottom: 10px; margin-bottom: 20px; }
        .article { border-left: 4px solid #FFA116; padding: 15px; margin-bottom: 20px; background-color: #fafafa; border-radius: 4px; }
        .article-title { font-size: 18px; font-weight: bold; color: #262626; margin-bottom: 8px; }
        .article-title a { color: #262626; text-decoration: none; }
        .article-meta { font-size: 13px; color: #666; margin-bottom: 10px; }
        .article-summary { font-size: 14px; color: #555; line-height: 1.5; margin-bottom: 10px; }
        .article-tags { margin-top: 10px; }
        .tag { background-color: #e8f4f8; color: #0066cc; padding: 3px 10px; border-radius: 12px; font-size: 12px; margin-right: 6px; }
        .reactions { font-size: 13px; color: #888; margin-top: 8px; }
        .footer { text-align: center; margin-top: 30px; padding-top: 20px; border-top: 1px solid #ddd; color: #888; font-size: 12px; }
        .count { color: #FFA116; font-weight: bold; }
"""


def truncate_text(text: str, max_len: int) -> str:
    """Cut text to ``max_len`` characters, marking the cut with ``...``"""
    if len(text) <= max_len:
        return text
    return text[:max_len] + "..."


class HtmlDigestGenerator:
    """Generates the HTML e-mail body for a digest"""

    def __init__(self, tz: tzinfo):
        self.tz = tz

    def generate(self, items: List[DiscussItem], generated_at: datetime) -> str:
        """Generate a complete HTML document"""
        html_parts = []
        html_parts.append("<!DOCTYPE html>\n<html>\n<head>")
        html_parts.append('    <meta charset="utf-8">')
        html_parts.append(f"    <style>{_STYLE}    </style>")
        html_parts.append("</head>\n<body>")
        html_parts.append('    <div class="container">')
        html_parts.append("        <h1>📚 LeetCode Daily Articles</h1>")
        html_parts.append(
            f'        <p>Found <span class="count">{len(items)}</span> new articles:</p>'
        )

        for i, item in enumerate(items, 1):
            html_parts.append(self._format_item(item, i))

        local = generated_at.astimezone(self.tz)
        footer_date = (
            f"{local:%B} {local.day}, {local.year} at "
            f"{local.hour % 12 or 12}:{local:%M %p %Z}"
        )
        html_parts.append('        <div class="footer">')
        html_parts.append(
            f"            <p>Automated LeetCode Articles Digest | "
            f"Generated on {escape(footer_date)}</p>"
        )
        html_parts.append("        </div>")
        html_parts.append("    </div>\n</body>\n</html>")

        return "\n".join(html_parts)

    def _format_item(self, item: DiscussItem, index: int) -> str:
        """Format a single article card"""
        lines = []
        lines.append('        <div class="article">')
        lines.append(
            f'            <div class="article-title">{index}. '
            f'<a href="{escape(item.url)}">{escape(item.title)}</a></div>'
        )
        lines.append(
            f'            <div class="article-meta">👤 {escape(item.author.user_name)}'
            f" | 📅 {escape(format_display_timestamp(item.created_at, self.tz))}"
            f" | 📝 {escape(item.article_type)}</div>"
        )

        if item.summary:
            summary = truncate_text(item.summary, SUMMARY_MAX_CHARS)
            lines.append(
                f'            <div class="article-summary">{escape(summary)}</div>'
            )

        if item.tags:
            chips = "".join(
                f'<span class="tag">{escape(tag.name)}</span>' for tag in item.tags
            )
            lines.append(f'            <div class="article-tags">{chips}</div>')

        if item.reactions:
            reactions = " | ".join(
                f"{escape(r.reaction_type)}: {r.count}" for r in item.reactions
            )
            lines.append(f'            <div class="reactions">{reactions}</div>')

        lines.append("        </div>")
        return "\n".join(lines)
