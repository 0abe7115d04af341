"""HTML pages for the room list and the GitHub login button"""
from datetime import datetime
from html import escape
from typing import Optional, Union
from urllib.parse import urljoin

from fastapi.responses import HTMLResponse
from starlette.datastructures import URL

from chat_app.schemas import AuthOutcome, RoomSummary

PAGE_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
    <title>Chat</title>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1">
    <style>
        * {{ margin: 0; padding: 0; box-sizing: border-box; }}
        body {{
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
            min-height: 100vh;
            display: flex;
            flex-direction: column;
            align-items: center;
            justify-content: center;
        }}
        ul {{ list-style: none; }}
        li {{ padding: 16px 0; border-bottom: 1px solid #e5e7eb; }}
        li a {{ display: block; margin-left: 12px; text-decoration: none; }}
        .room-name {{ font-size: 14px; font-weight: 500; color: #111827; }}
        .room-activity {{ font-size: 14px; color: #6b7280; }}
        .login-btn {{
            background: #111827;
            color: #f3f4f6;
            font-weight: bold;
            font-size: 14px;
            padding: 12px 16px;
            border-radius: 4px;
            text-decoration: none;
            display: flex;
            align-items: center;
        }}
        .login-btn:hover {{ color: #fff; }}
        .login-btn svg {{ width: 24px; height: 24px; margin-right: 16px; fill: currentColor; }}
    </style>
</head>
<body>
{body}
</body>
</html>
"""

GITHUB_ICON = (
    '<svg viewBox="0 0 24 24" xmlns="http://www.w3.org/2000/svg">'
    '<path d="M12 .297c-6.63 0-12 5.373-12 12 0 5.303 3.438 9.8 8.205 11.385.6.113.82-.258.82-.577 '
    '0-.285-.01-1.04-.015-2.04-3.338.724-4.042-1.61-4.042-1.61C4.422 18.07 3.633 17.7 3.633 17.7c-1.087-.744.084-.729.084-.729 '
    '1.205.084 1.838 1.236 1.838 1.236 1.07 1.835 2.809 1.305 3.495.998.108-.776.417-1.305.76-1.605-2.665-.3-5.466-1.332-5.466-5.93 '
    '0-1.31.465-2.38 1.235-3.22-.135-.303-.54-1.523.105-3.176 0 0 1.005-.322 3.3 1.23.96-.267 1.98-.399 3-.405 1.02.006 2.04.138 '
    '3 .405 2.28-1.552 3.285-1.23 3.285-1.23.645 1.653.24 2.873.12 3.176.765.84 1.23 1.91 1.23 3.22 0 4.61-2.805 5.625-5.475 '
    '5.92.42.36.81 1.096.81 2.22 0 1.606-.015 2.896-.015 3.286 0 .315.21.69.825.57C20.565 22.092 24 17.592 24 12.297c0-6.627-5.373-12-12-12"/>'
    '</svg>'
)

LOGIN_PATH = "/api/login"


def format_activity(last_message_at: Optional[datetime]) -> str:
    """e.g. 'October 18, 2026 at 10:40:05 AM', or 'No messages'"""
    if last_message_at is None:
        return "No messages"
    clock = last_message_at.strftime("%I:%M:%S %p").lstrip("0")
    return f"{last_message_at:%B} {last_message_at.day}, {last_message_at.year} at {clock}"


def render_room(room: RoomSummary, url: URL) -> str:
    href = urljoin(str(url), str(room.id))
    return (
        '<li><a href="{href}">'
        '<p class="room-name">{name}</p>'
        '<p class="room-activity">{activity}</p>'
        '</a></li>'
    ).format(
        href=escape(href),
        name=escape(room.name),
        activity=escape(format_activity(room.last_message_at)),
    )


def render_page(data: Union[AuthOutcome, bool, None], url: URL) -> HTMLResponse:
    """Room list when `data` carries rooms, otherwise the login button"""
    if data:
        items = "\n".join(render_room(room, url) for room in data.rooms)
        body = f'<ul role="list">\n{items}\n</ul>'
    else:
        body = f'<a class="login-btn" href="{LOGIN_PATH}">{GITHUB_ICON}<span>Sign up with Github</span></a>'
    return HTMLResponse(PAGE_TEMPLATE.format(body=body))
