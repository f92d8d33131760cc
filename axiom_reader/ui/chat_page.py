"""NiceGUI research page: upload, axiom flashcards, and streaming dialogue."""

import re

from nicegui import events, ui

from axiom_reader.agent.session_manager import SessionManager
from axiom_reader.api.documents import get_document_registry
from axiom_reader.models.schemas import AppState, Axiom, Message, Role, View
from axiom_reader.ui.controller import ViewController

_ARABIC_RE = re.compile(r"[\u0600-\u06FF]")


def text_direction(text: str) -> str:
    """Return "rtl" for text containing Arabic script, else "ltr"."""
    return "rtl" if _ARABIC_RE.search(text) else "ltr"


def markdown_to_html(text: str) -> str:
    """Convert markdown to HTML for chat display.

    Supports: bold, italic, inline code, code blocks, links, lists.
    """
    # Escape HTML entities first
    text = text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")

    # Code blocks (```code```)
    text = re.sub(
        r"```(\w*)\n?([\s\S]*?)```",
        r'<pre class="bg-gray-900 text-gray-100 rounded-lg p-3 my-2 overflow-x-auto text-xs"><code>\2</code></pre>',
        text,
    )

    # Inline code (`code`)
    text = re.sub(
        r"`([^`]+)`",
        r'<code class="bg-white/10 text-indigo-300 px-1.5 py-0.5 rounded text-xs">\1</code>',
        text,
    )

    # Bold (**text** or __text__)
    text = re.sub(r"\*\*(.+?)\*\*", r"<strong>\1</strong>", text)
    text = re.sub(r"__(.+?)__", r"<strong>\1</strong>", text)

    # Italic (*text* or _text_)
    text = re.sub(r"\*([^*]+)\*", r"<em>\1</em>", text)
    text = re.sub(r"_([^_]+)_", r"<em>\1</em>", text)

    # Links [text](url), web URLs only; anything else stays literal text
    text = re.sub(
        r"\[([^\]]+)\]\((https?://[^\s)\"']+)\)",
        r'<a href="\2" class="text-indigo-400 underline" target="_blank" rel="noopener noreferrer">\1</a>',
        text,
    )

    text = _wrap_list_items(text, r"^[-*]\s+", "ul", "list-disc")
    text = _wrap_list_items(text, r"^\d+\.\s+", "ol", "list-decimal")

    # Line breaks (preserve newlines as <br>)
    return text.replace("\n", "<br>")


def _wrap_list_items(text: str, marker: str, tag: str, style: str) -> str:
    """Group consecutive list lines into a single <ul> or <ol>."""
    in_list = False
    result = []
    for line in text.split("\n"):
        stripped = line.strip()
        if re.match(marker, stripped):
            if not in_list:
                result.append(f'<{tag} class="{style} list-inside my-2 space-y-1">')
                in_list = True
            result.append(f"<li>{re.sub(marker, '', stripped)}</li>")
        else:
            if in_list:
                result.append(f"</{tag}>")
                in_list = False
            result.append(line)
    if in_list:
        result.append(f"</{tag}>")
    return "\n".join(result)


CUSTOM_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;600;900&family=Amiri&display=swap"
      rel="stylesheet">
<style>
    * { font-family: 'Inter', 'Amiri', sans-serif; }

    body { background: #05070a; color: #e2e8f0; min-height: 100vh; }

    .glass-card {
        background: rgba(255, 255, 255, 0.03);
        border: 1px solid rgba(255, 255, 255, 0.08);
        border-radius: 24px;
    }

    .flashcard { min-height: 16rem; transition: transform 0.3s; }
    .flashcard:hover { transform: scale(1.02); }

    .message-user {
        background: rgba(79, 70, 229, 0.2);
        border: 1px solid rgba(99, 102, 241, 0.2);
        border-radius: 18px 18px 4px 18px;
    }

    .message-assistant {
        background: rgba(255, 255, 255, 0.03);
        border: 1px solid rgba(255, 255, 255, 0.05);
        border-radius: 18px 18px 18px 4px;
        font-family: Georgia, serif;
    }

    .typing-dot {
        width: 6px; height: 6px;
        background: #6366f1;
        border-radius: 50%;
        animation: bounce 1.4s infinite ease-in-out;
    }
    .typing-dot:nth-child(2) { animation-delay: 0.2s; }
    .typing-dot:nth-child(3) { animation-delay: 0.4s; }

    @keyframes bounce {
        0%, 60%, 100% { transform: translateY(0); }
        30% { transform: translateY(-6px); }
    }
</style>
"""


@ui.page("/")
def research_page() -> None:
    """Main page. Each browser client gets its own session."""
    ui.add_head_html(CUSTOM_CSS)
    ui.dark_mode().enable()

    layout: dict = {"key": None, "show_disclaimer": True}

    def layout_key() -> tuple:
        return (
            controller.state,
            controller.view,
            controller.language,
            controller.error,
            controller.auth_required,
            controller.is_sending,
        )

    def on_change() -> None:
        key = layout_key()
        if key != layout["key"]:
            layout["key"] = key
            render_sidebar.refresh()
            render_main.refresh()
        else:
            render_transcript.refresh()

    controller = ViewController(SessionManager(), get_document_registry(), on_change=on_change)

    def render_message(msg: Message, pending: bool) -> None:
        is_user = msg.role is Role.USER
        align = "justify-end" if is_user else "justify-start"
        bubble = "message-user" if is_user else "message-assistant"

        with ui.row().classes(f"w-full {align}"):
            with ui.element("div").classes(f"max-w-[85%] px-6 py-4 {bubble}").props(
                f'dir="{text_direction(msg.content)}"'
            ):
                if not msg.content and pending:
                    with ui.row().classes("gap-1 p-1"):
                        for _ in range(3):
                            ui.element("div").classes("typing-dot")
                elif is_user:
                    ui.label(msg.content).classes("text-sm whitespace-pre-wrap")
                else:
                    ui.html(markdown_to_html(msg.content), sanitize=False).classes(
                        "text-base leading-relaxed"
                    )

    @ui.refreshable
    def render_transcript() -> None:
        last = len(controller.messages) - 1
        for i, msg in enumerate(controller.messages):
            render_message(msg, pending=controller.is_sending and i == last)

    def render_flashcard(index: int, axiom: Axiom) -> None:
        with ui.element("div").classes("flashcard glass-card p-8 cursor-pointer") as card:
            front = ui.column().classes("w-full h-full gap-4")
            with front:
                ui.label(f"{controller.t('flashcard_pillar')} {index + 1}").classes(
                    "text-[10px] text-indigo-400 font-black uppercase tracking-widest"
                )
                ui.label(axiom.axiom).classes("text-2xl font-black text-white").props(
                    f'dir="{text_direction(axiom.axiom)}"'
                )
                ui.label(controller.t("flashcard_touch")).classes("text-xs text-slate-500 mt-auto")
            back = ui.column().classes("w-full h-full gap-4")
            with back:
                ui.label(controller.t("flashcard_summary")).classes(
                    "text-[10px] text-indigo-400 font-black uppercase tracking-widest"
                )
                ui.label(axiom.definition).classes("text-base text-slate-200 italic").props(
                    f'dir="{text_direction(axiom.definition)}"'
                )
            back.set_visibility(False)

        def flip() -> None:
            front.set_visibility(not front.visible)
            back.set_visibility(not back.visible)

        card.on("click", flip)

    def render_key_prompt() -> None:
        with ui.column().classes("w-full items-center py-20"):
            with ui.column().classes("glass-card p-12 max-w-md w-full gap-6 items-center"):
                ui.icon("key").classes("text-5xl text-indigo-400")
                ui.label(controller.t("key_title")).classes("text-3xl font-black text-white")
                ui.label(controller.t("key_body")).classes("text-sm text-slate-400 text-center")
                if controller.error:
                    ui.label(controller.error).classes("text-sm text-rose-500")
                key_input = ui.input(
                    placeholder=controller.t("key_placeholder"), password=True
                ).classes("w-full")
                ui.button(
                    controller.t("key_button"),
                    on_click=lambda: controller.submit_api_key(key_input.value or ""),
                ).classes("w-full").props("unelevated color=indigo")

    def render_upload() -> None:
        async def handle_upload(e: events.UploadEventArguments) -> None:
            await controller.upload(e.file.name, e.file.content_type, e.file.read)

        with ui.column().classes("w-full items-center gap-10 py-20 text-center"):
            ui.label(controller.t("title")).classes("text-6xl font-black text-white")
            ui.label(controller.t("subtitle")).classes("text-xl text-slate-400 italic")
            ui.label(controller.t("subtitle2")).classes(
                "text-xs text-indigo-500 font-black uppercase tracking-widest"
            )
            with ui.column().classes("glass-card p-12 max-w-xl w-full items-center gap-4"):
                ui.icon("cloud_upload").classes("text-5xl text-indigo-500")
                ui.label(controller.t("upload_title")).classes("text-2xl font-black text-white")
                ui.label(controller.t("upload_subtitle")).classes("text-sm text-slate-500")
                ui.upload(on_upload=handle_upload, auto_upload=True, max_files=1).props(
                    'accept="application/pdf" flat bordered'
                ).classes("w-full")
            if controller.error:
                ui.label(controller.error).classes("text-sm text-rose-500")

    def render_progress() -> None:
        status_key = "transmitting" if controller.state is AppState.UPLOADING else "analyzing"
        with ui.column().classes("w-full items-center gap-8 py-40"):
            ui.spinner(size="xl", color="indigo")
            ui.label(controller.t(status_key)).classes("text-3xl font-black text-white")
            ui.label(controller.file_name).classes("text-slate-500 italic")

    def render_disclaimer() -> None:
        def dismiss() -> None:
            layout["show_disclaimer"] = False
            render_main.refresh()

        with ui.row().classes("glass-card w-full p-6 items-center gap-4 no-wrap"):
            ui.icon("menu_book").classes("text-3xl text-indigo-400")
            ui.label(controller.t("reading_disclaimer")).classes(
                "flex-grow text-sm text-slate-300 italic"
            )
            ui.button(icon="close", on_click=dismiss).props("flat round color=grey")

    def render_research() -> None:
        with ui.column().classes("w-full gap-6"):
            ui.label(controller.file_name).classes(
                "text-[10px] text-indigo-500 font-black uppercase tracking-widest"
            )
            ui.label(controller.t("axiom_title")).classes("text-4xl font-black text-white")
            with ui.grid(columns=3).classes("w-full gap-6"):
                for i, axiom in enumerate(controller.axioms):
                    render_flashcard(i, axiom)

        with ui.column().classes("w-full gap-6 mt-12"):
            ui.label(controller.t("dialogue_title")).classes("text-4xl font-black text-white")
            with ui.column().classes("glass-card w-full"):
                with ui.scroll_area().classes("w-full h-[500px]"):
                    with ui.column().classes("w-full gap-6 p-6"):
                        render_transcript()
                render_input()

    def render_input() -> None:
        async def send() -> None:
            text = input_field.value or ""
            input_field.value = ""
            await controller.send_message(text)

        with ui.row().classes("w-full p-6 gap-4 items-end no-wrap"):
            input_field = (
                ui.textarea(placeholder=controller.t("placeholder"))
                .props("autogrow borderless dense rows=1 dark")
                .classes("flex-grow")
                .on("keydown.enter.prevent", send)
            )
            send_btn = ui.button(controller.t("send"), on_click=send).props(
                "unelevated color=indigo"
            )
            if controller.is_sending:
                send_btn.disable()

    def render_document() -> None:
        ui.element("iframe").props(f'src="{controller.document_url or ""}"').classes(
            "w-full glass-card"
        ).style("height: calc(100vh - 200px); border: none")

    @ui.refreshable
    def render_main() -> None:
        direction = "rtl" if controller.language.is_rtl else "ltr"
        with ui.column().classes("w-full max-w-6xl mx-auto p-10 gap-10").props(f'dir="{direction}"'):
            if controller.auth_required:
                render_key_prompt()
            elif controller.state in (AppState.IDLE, AppState.ERROR):
                render_upload()
            elif controller.is_working:
                render_progress()
            else:
                if layout["show_disclaimer"]:
                    render_disclaimer()
                if controller.view is View.RESEARCH:
                    render_research()
                else:
                    render_document()

    @ui.refreshable
    def render_sidebar() -> None:
        with ui.dialog() as about_dialog, ui.card().classes("glass-card p-10 max-w-2xl"):
            ui.label(controller.t("sidebar_about")).classes("text-3xl font-black")
            ui.label(controller.t("about_content")).classes("text-lg italic")
        with ui.dialog() as help_dialog, ui.card().classes("glass-card p-10 max-w-2xl"):
            ui.label(controller.t("sidebar_help")).classes("text-3xl font-black")
            ui.label(controller.t("help_content")).classes("text-lg italic")

        with ui.column().classes("w-full gap-3"):
            ui.button(
                controller.t("new_session"), icon="add", on_click=controller.new_session
            ).props("flat align=left color=green").classes("w-full")
            research_btn = ui.button(
                controller.t("sidebar_research"),
                icon="auto_stories",
                on_click=lambda: controller.set_view(View.RESEARCH),
            ).props("flat align=left").classes("w-full")
            document_btn = ui.button(
                controller.t("sidebar_view_pdf"),
                icon="picture_as_pdf",
                on_click=lambda: controller.set_view(View.DOCUMENT),
            ).props("flat align=left").classes("w-full")
            if not controller.is_ready:
                research_btn.disable()
                document_btn.disable()

        ui.space()
        with ui.column().classes("w-full gap-2"):
            ui.button(controller.t("sidebar_about"), icon="info", on_click=about_dialog.open).props(
                "flat align=left color=grey"
            ).classes("w-full")
            ui.button(controller.t("sidebar_help"), icon="help", on_click=help_dialog.open).props(
                "flat align=left color=grey"
            ).classes("w-full")
            ui.button(
                controller.t("language_toggle"), icon="translate", on_click=controller.toggle_language
            ).props("outline color=grey").classes("w-full")

    # === UI Layout ===
    with ui.left_drawer(value=True).classes("bg-black/40 p-6 flex flex-col") as drawer:
        render_sidebar()

    with ui.header().classes("bg-transparent items-center"):
        ui.button(icon="menu", on_click=drawer.toggle).props("flat round color=white")

    render_main()
