"""Interface strings for each supported language."""

from axiom_reader.models.schemas import Language

TRANSLATIONS: dict[Language, dict[str, str]] = {
    Language.EN: {
        "title": "Axiom Reader",
        "subtitle": "Deconstruct any document into its foundational pillars.",
        "subtitle2": "Grounded strictly in your text",
        "reading_disclaimer": (
            "Every answer is derived only from the uploaded document and mirrors "
            "its author's style. Nothing outside the text is added."
        ),
        "upload_title": "Upload a document",
        "upload_subtitle": "PDF files only, up to 10MB",
        "new_session": "New session",
        "transmitting": "Transmitting document...",
        "analyzing": "Deconstructing the intellectual framework...",
        "sidebar_about": "About",
        "sidebar_help": "Help",
        "sidebar_research": "Research",
        "sidebar_view_pdf": "View document",
        "language_toggle": "العربية",
        "dialogue_title": "Dialogue",
        "axiom_title": "Foundational Axioms",
        "placeholder": "Ask about the document...",
        "send": "Inquire",
        "greeting": "The sanctuary is prepared for your inquiry.",
        "flashcard_pillar": "Pillar",
        "flashcard_touch": "Click to reveal",
        "flashcard_summary": "Summary",
        "about_content": (
            "Axiom Reader extracts the six conceptual pillars of a document and "
            "opens a conversation that stays within the boundaries of the text."
        ),
        "help_content": (
            "Upload a PDF. Once the axioms appear, click a card to read its "
            "summary, then ask questions in the dialogue. Use 'New session' to "
            "start over with another document."
        ),
        "error_not_pdf": "Please upload a PDF.",
        "error_connection": "Connection failed.",
        "error_reselect_key": "Please re-select your API key.",
        "error_stream": "The link was severed:",
        "key_title": "API Key Required",
        "key_body": "A Gemini API key is required to analyze documents.",
        "key_placeholder": "Paste your API key",
        "key_button": "Use this key",
    },
    Language.AR: {
        "title": "قارئ المسلّمات",
        "subtitle": "فكّك أي وثيقة إلى ركائزها التأسيسية.",
        "subtitle2": "مرتكز حصراً على نصّك",
        "reading_disclaimer": (
            "كل إجابة مستمدة من الوثيقة المرفوعة فقط وتحاكي أسلوب مؤلفها. "
            "لا يُضاف شيء من خارج النص."
        ),
        "upload_title": "ارفع وثيقة",
        "upload_subtitle": "ملفات PDF فقط، حتى 10 ميغابايت",
        "new_session": "جلسة جديدة",
        "transmitting": "جارٍ إرسال الوثيقة...",
        "analyzing": "جارٍ تفكيك الإطار الفكري...",
        "sidebar_about": "حول",
        "sidebar_help": "مساعدة",
        "sidebar_research": "البحث",
        "sidebar_view_pdf": "عرض الوثيقة",
        "language_toggle": "English",
        "dialogue_title": "الحوار",
        "axiom_title": "المسلّمات التأسيسية",
        "placeholder": "اسأل عن الوثيقة...",
        "send": "استفسر",
        "greeting": "المحراب مهيأ لاستفسارك.",
        "flashcard_pillar": "الركيزة",
        "flashcard_touch": "انقر للكشف",
        "flashcard_summary": "الخلاصة",
        "about_content": (
            "يستخرج قارئ المسلّمات الركائز المفاهيمية الست لأي وثيقة ويفتح حواراً "
            "يبقى ضمن حدود النص."
        ),
        "help_content": (
            "ارفع ملف PDF. عند ظهور المسلّمات انقر على أي بطاقة لقراءة خلاصتها، "
            "ثم اطرح أسئلتك في الحوار. استخدم 'جلسة جديدة' للبدء بوثيقة أخرى."
        ),
        "error_not_pdf": "يرجى تحميل ملف PDF.",
        "error_connection": "فشل الاتصال.",
        "error_reselect_key": "يرجى إعادة اختيار مفتاح API.",
        "error_stream": "انقطع الاتصال:",
        "key_title": "مفتاح API مطلوب",
        "key_body": "يلزم مفتاح Gemini API لتحليل الوثائق.",
        "key_placeholder": "الصق مفتاح API",
        "key_button": "استخدم هذا المفتاح",
    },
}


def translate(language: Language, key: str) -> str:
    return TRANSLATIONS[language][key]
