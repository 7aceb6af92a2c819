"""
Streamlit App - Catalog Assistant chat page.
============================================

Web interface for:
- Chatting with the assistant about ACFI courses
- Example questions in the sidebar
- Cited courses per answer
- Catalog status and clearing the conversation

Run with: streamlit run src/catalog_assistant/app/streamlit_app.py
"""

import streamlit as st

# Page config must be first Streamlit command
st.set_page_config(
    page_title="Catalog Assistant",
    page_icon="🎓",
    layout="centered",
    initial_sidebar_state="expanded",
)

from catalog_assistant.rag.formatting import render_markdown
from catalog_assistant.rag.templates import EXAMPLE_QUESTIONS


# ─────────────────────────────────────────────────────────────────────────────
# Session State Initialization
# ─────────────────────────────────────────────────────────────────────────────


def get_assistant():
    """Get this browser session's assistant, creating it on first use."""
    if "assistant" not in st.session_state:
        from catalog_assistant.rag.assistant import CourseAssistant
        from catalog_assistant.shared.logging import configure_logging

        configure_logging()
        assistant = CourseAssistant(output_format="markdown")
        assistant.initialize()
        st.session_state.assistant = assistant
    return st.session_state.assistant


def init_session_state():
    """Initialize session state variables."""
    if "messages" not in st.session_state:
        st.session_state.messages = []

    if "pending_question" not in st.session_state:
        st.session_state.pending_question = None


# ─────────────────────────────────────────────────────────────────────────────
# Sidebar
# ─────────────────────────────────────────────────────────────────────────────


def render_sidebar(assistant):
    """Render sidebar with example questions and status."""
    with st.sidebar:
        st.title("🎓 Catalog Assistant")
        st.caption("UNH Graduate Accounting & Finance (ACFI)")

        st.divider()

        st.subheader("💡 Try asking")
        for example in EXAMPLE_QUESTIONS:
            if st.button(example, use_container_width=True):
                st.session_state.pending_question = example

        st.divider()

        st.subheader("🚀 Quick Actions")
        if st.button("🗑️ Clear Chat", use_container_width=True):
            st.session_state.messages = []
            assistant.clear_history()
            st.rerun()

        st.divider()

        st.subheader("ℹ️ Status")
        status = assistant.get_status()
        if status["initialized"]:
            st.success(assistant.data_status_message())
        else:
            st.warning("Course catalog could not be loaded. Answers will be empty.")


# ─────────────────────────────────────────────────────────────────────────────
# Main Chat Interface
# ─────────────────────────────────────────────────────────────────────────────


def render_sources(sources: list[str]):
    """Render the cited course codes under an answer."""
    if sources:
        with st.expander(f"📚 Sources ({len(sources)} courses)"):
            st.markdown(", ".join(f"`{code}`" for code in sources))


def render_chat(assistant):
    """Render main chat interface."""
    st.title("💬 Ask about ACFI Courses")

    with st.chat_message("assistant"):
        st.markdown(f"{assistant.greeting()}\n\n{assistant.help_text()}")

    # Display chat history
    for message in st.session_state.messages:
        with st.chat_message(message["role"]):
            st.markdown(message["content"])
            if message["role"] == "assistant":
                render_sources(message.get("sources", []))

    prompt = st.chat_input("Ask a question about ACFI courses...")
    if st.session_state.pending_question:
        prompt = st.session_state.pending_question
        st.session_state.pending_question = None

    if not prompt:
        return

    st.session_state.messages.append({"role": "user", "content": prompt})
    with st.chat_message("user"):
        st.markdown(prompt)

    with st.chat_message("assistant"):
        with st.spinner("Searching course information..."):
            response = assistant.ask(prompt)
        answer = render_markdown(response)
        st.markdown(answer)
        render_sources(response.sources)

    st.session_state.messages.append({
        "role": "assistant",
        "content": answer,
        "sources": response.sources,
    })


# ─────────────────────────────────────────────────────────────────────────────
# Main App
# ─────────────────────────────────────────────────────────────────────────────


def main():
    """Main application entry point."""
    init_session_state()
    assistant = get_assistant()
    render_sidebar(assistant)
    render_chat(assistant)


if __name__ == "__main__":
    main()
