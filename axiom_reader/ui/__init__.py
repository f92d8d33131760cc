"""NiceGUI interface - thin visualization layer over the view controller.

Responsibilities:
    - PDF upload with uploading/analyzing indicators
    - Axiom flashcards and the streaming dialogue
    - Sidebar: new session, research/document views, language, about/help
    - API key prompt when the credential is missing or rejected

Rendering lives in chat_page; all state transitions live in controller.
"""
