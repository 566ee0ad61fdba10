"""NiceGUI chat interface backed by the relay's /api/chat endpoint."""

from nicegui import ui

from chatrelay.ui.client import RelayClient
from chatrelay.ui.formatting import markdown_to_html, plain_to_html
from chatrelay.ui.session import ChatSession, Message, Role

CUSTOM_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600&display=swap"
      rel="stylesheet">
<style>
    * { font-family: 'Inter', sans-serif; }

    body { background: #f5f5f5; min-height: 100vh; }
    body.body--dark { background: #121212; }

    .app-container {
        background: white;
        border-radius: 12px;
        box-shadow: 0 2px 8px rgba(0, 0, 0, 0.1);
        overflow: hidden;
    }
    .body--dark .app-container { background: #1e1e1e; }

    .header { background: linear-gradient(135deg, #667eea 0%, #764ba2 100%); }

    .message-user {
        background: linear-gradient(135deg, #667eea 0%, #764ba2 100%);
        color: white;
        border-radius: 18px 18px 4px 18px;
    }

    .message-bot {
        background: #f3f4f6;
        color: #1f2937;
        border-radius: 18px 18px 18px 4px;
    }
    .body--dark .message-bot { background: #2d2d2d; color: #e5e7eb; }

    .message-system {
        background: #fef2f2;
        color: #b91c1c;
        border: 1px solid #fecaca;
        border-radius: 12px;
    }

    .typing-dot {
        width: 8px; height: 8px;
        background: #667eea;
        border-radius: 50%;
        animation: bounce 1.4s infinite ease-in-out;
    }
    .typing-dot:nth-child(2) { animation-delay: 0.2s; }
    .typing-dot:nth-child(3) { animation-delay: 0.4s; }

    @keyframes bounce {
        0%, 60%, 100% { transform: translateY(0); }
        30% { transform: translateY(-6px); }
    }

    .send-btn { background: linear-gradient(135deg, #667eea 0%, #764ba2 100%) !important; }
</style>
"""

_BUBBLE_CLASSES = {
    Role.USER: "message-user",
    Role.BOT: "message-bot",
    Role.SYSTEM: "message-system",
}


def connection_label(connected: bool | None) -> tuple[str, str]:
    """Badge text and colour for a connection state."""
    if connected is None:
        return "Checking...", "text-white/70"
    if connected:
        return "Connected", "text-green-200"
    return "Offline", "text-red-200"


def render_message(msg: Message) -> None:
    if msg.role is Role.SYSTEM:
        with ui.row().classes("w-full justify-center"):
            with ui.element("div").classes("px-4 py-2 message-system max-w-[85%]"):
                with ui.row().classes("items-center gap-2 no-wrap"):
                    ui.icon("error_outline").classes("text-lg")
                    ui.html(plain_to_html(msg.text), sanitize=False).classes("text-sm")
        return

    is_user = msg.role is Role.USER
    align = "justify-end" if is_user else "justify-start"
    content = plain_to_html(msg.text) if is_user else markdown_to_html(msg.text)

    with ui.row().classes(f"w-full {align}"):
        with ui.column().classes("max-w-[75%] gap-1"):
            with ui.element("div").classes(f"px-4 py-3 {_BUBBLE_CLASSES[msg.role]}"):
                ui.html(content, sanitize=False).classes("text-sm leading-relaxed")
            ui.label(msg.timestamp.strftime("%I:%M %p")).classes(
                f"text-[10px] text-gray-400 {'self-end' if is_user else 'self-start'}"
            )


@ui.page("/")
def chat_page() -> None:
    """Main chat page."""
    ui.add_head_html(CUSTOM_CSS)
    session = ChatSession(RelayClient())
    dark = ui.dark_mode()

    messages_container: ui.column
    scroll_area: ui.scroll_area
    input_field: ui.textarea
    send_btn: ui.button
    status_label: ui.label
    banner: ui.label

    def refresh_status() -> None:
        text, colour = connection_label(session.connected)
        status_label.set_text(text)
        status_label.classes(
            replace=f"text-xs font-medium {colour}",
        )
        banner.set_text(session.error_banner or "")
        banner.set_visibility(bool(session.error_banner))
        if session.is_loading:
            input_field.disable()
            send_btn.disable()
        else:
            input_field.enable()
            send_btn.enable()

    def refresh_messages() -> None:
        messages_container.clear()
        with messages_container:
            if not session.messages:
                with ui.column().classes("w-full h-64 items-center justify-center gap-3"):
                    ui.icon("forum").classes("text-5xl text-gray-300")
                    ui.label("Start a conversation").classes("text-lg text-gray-400")
            for msg in session.messages:
                render_message(msg)
            if session.is_loading:
                with ui.row().classes("w-full justify-start"):
                    with ui.element("div").classes("message-bot px-4 py-3"):
                        with ui.row().classes("items-center gap-2"):
                            with ui.row().classes("gap-1"):
                                for _ in range(3):
                                    ui.element("div").classes("typing-dot")
                            ui.label("AI is typing...").classes("text-sm text-gray-500 italic")
        scroll_area.scroll_to(percent=1.0)

    def on_session_change() -> None:
        refresh_messages()
        refresh_status()

    session.on_change.append(on_session_change)

    async def send_message() -> None:
        text = input_field.value or ""
        if not text.strip() or session.is_loading:
            return
        input_field.value = ""
        await session.send_message(text)
        if session.error_banner:
            ui.notify(session.error_banner, type="negative")

    async def check_connection() -> None:
        await session.check_connection()

    # === UI Layout ===
    with (
        ui.element("div").classes("w-full min-h-screen p-4 md:p-8"),
        ui.column().classes("w-full max-w-3xl mx-auto app-container").style(
            "height: calc(100vh - 4rem)"
        ),
    ):
        # Header
        with ui.row().classes("w-full header px-5 py-4 items-center justify-between"):
            with ui.row().classes("items-center gap-3"):
                ui.icon("smart_toy").classes("text-white text-3xl")
                ui.label("AI Chatbot").classes("text-lg font-semibold text-white")
            with ui.row().classes("items-center gap-2"):
                with ui.element("div").classes(
                    "bg-white/20 rounded-full px-3 py-1 flex items-center gap-2"
                ):
                    ui.icon("circle").classes("text-white/80 text-xs")
                    status_label = ui.label()
                ui.button(icon="refresh", on_click=check_connection).props(
                    "flat round color=white"
                ).tooltip("Retry connection")
                ui.button(icon="dark_mode", on_click=dark.toggle).props(
                    "flat round color=white"
                ).tooltip("Toggle dark mode")
                ui.button(icon="delete_sweep", on_click=session.clear_transcript).props(
                    "flat round color=white"
                ).tooltip("Clear chat")

        banner = ui.label().classes("w-full px-5 py-2 text-sm text-red-700 bg-red-50")

        # Messages
        with ui.scroll_area().classes("flex-grow w-full") as scroll_area:
            messages_container = ui.column().classes("w-full gap-4 p-5")

        # Input
        with ui.row().classes("w-full p-4 gap-3 items-end border-t"):
            input_field = (
                ui.textarea(placeholder="Type your message...")
                .props("autogrow outlined dense rows=1")
                .classes("flex-grow")
                .on("keydown.enter.prevent", send_message)
            )
            send_btn = (
                ui.button(icon="send", on_click=send_message)
                .props("round unelevated")
                .classes("send-btn")
            )

    on_session_change()
    ui.timer(0.1, check_connection, once=True)


def main() -> None:
    ui.run(title="AI Chatbot", port=8080, reload=False)


if __name__ == "__main__":
    main()
