import json
import logging

import streamlit as st

from quiz_import.dto import build_test_payload, unresolved_questions
from quiz_import.editing import (
    add_question,
    delete_question,
    merge_result,
    set_correct_option,
    update_option_text,
    update_question_text,
)
from quiz_import.errors import FormatError, NoQuestionsFoundError, ValidationError
from quiz_import.models import Option, ParsedResult, TestForm
from quiz_import.parsing import import_docx

NEW_QUESTION_OPTIONS = 4
DEFAULT_DURATION = 30        # minutes
DEFAULT_PASSING_SCORE = 60   # percent

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

# Configure page *before* other st.* calls
st.set_page_config(page_title="Test import", layout="wide")


# -------------------------------------------------
# Session state helpers
# -------------------------------------------------
def get_quiz():
    return st.session_state.get("quiz")


def set_questions(questions):
    quiz = get_quiz()
    st.session_state["quiz"] = ParsedResult(questions=questions, title=quiz.title)


def import_upload(uploaded) -> None:
    """Parse an uploaded docx and append its questions to the session quiz."""
    upload_key = f"{uploaded.name}:{uploaded.size}"
    imported = st.session_state.setdefault("imported_uploads", set())
    if upload_key in imported:
        return

    try:
        parsed = import_docx(uploaded.getvalue())
    except FormatError as exc:
        st.error(f"Could not read {uploaded.name}: {exc}")
        return
    except NoQuestionsFoundError:
        st.error(f"No numbered questions found in {uploaded.name}. Is this the right file?")
        return

    imported.add(upload_key)
    st.session_state["quiz"] = merge_result(get_quiz(), parsed)
    st.success(f"Recovered **{len(parsed.questions)}** questions from {uploaded.name}")
    for warning in parsed.warnings:
        st.warning(str(warning))


# -------------------------------------------------
# Question editor
# -------------------------------------------------
def render_question(q) -> None:
    quiz = get_quiz()
    label = f"Question {q.number}"
    if not q.has_single_correct:
        label += " ⚠️"

    with st.expander(label, expanded=not q.has_single_correct):
        for warning in q.warnings:
            st.caption(f"⚠️ {warning}")

        text = st.text_area("Question", value=q.text, key=f"text-{q.uid}")
        if text != q.text:
            set_questions(update_question_text(quiz.questions, q.uid, text))

        for i, opt in enumerate(q.options):
            new_text = st.text_input(f"Option {i + 1}", value=opt.text, key=f"opt-{q.uid}-{i}")
            if new_text != opt.text:
                set_questions(update_option_text(get_quiz().questions, q.uid, i, new_text))

        if q.options:
            choice = st.radio(
                "Correct answer",
                options=list(range(len(q.options))),
                index=q.correct_index,
                format_func=lambda i: q.options[i].text or f"Option {i + 1}",
                key=f"correct-{q.uid}",
            )
            if choice is not None and choice != q.correct_index:
                set_questions(set_correct_option(get_quiz().questions, q.uid, choice))
                st.rerun()

        if st.button("Delete question", key=f"delete-{q.uid}"):
            set_questions(delete_question(get_quiz().questions, q.uid))
            st.rerun()


def render_add_question() -> None:
    with st.form("add-question", clear_on_submit=True):
        st.markdown("### Add question")
        text = st.text_area("Question")
        option_texts = [st.text_input(f"Option {i + 1}") for i in range(NEW_QUESTION_OPTIONS)]
        correct = st.radio(
            "Correct answer",
            options=list(range(NEW_QUESTION_OPTIONS)),
            format_func=lambda i: f"Option {i + 1}",
            horizontal=True,
        )
        if st.form_submit_button("Add"):
            options = [Option(t, i == correct) for i, t in enumerate(option_texts)]
            try:
                set_questions(add_question(get_quiz().questions, text, options))
            except ValidationError as exc:
                st.warning(str(exc))
                return
            st.rerun()


# -------------------------------------------------
# Save
# -------------------------------------------------
def render_save() -> None:
    quiz = get_quiz()
    st.markdown("### Test details")
    form = TestForm(
        title=st.text_input("Title", value=quiz.title or ""),
        course_id=int(st.number_input("Course id", min_value=1, step=1)),
        description=st.text_area("Description", value=""),
        duration=int(st.number_input("Duration (minutes)", min_value=1, value=DEFAULT_DURATION)),
        passing_score=int(
            st.number_input("Passing score (%)", min_value=0, max_value=100, value=DEFAULT_PASSING_SCORE)
        ),
        is_active=st.checkbox("Active", value=True),
    )

    pending = unresolved_questions(quiz.questions)
    if pending:
        numbers = ", ".join(str(q.number) for q in pending)
        st.warning(f"Pick one correct answer for question(s) {numbers} before saving.")
        st.button("Save test", disabled=True)
        return

    try:
        payload = build_test_payload(form, quiz.questions)
    except ValidationError as exc:
        st.warning(str(exc))
        return

    st.download_button(
        "⬇️ Save test (JSON)",
        data=json.dumps(payload, indent=2, ensure_ascii=False),
        file_name="test.json",
        mime="application/json",
    )


# -------------------------------------------------
# STREAMLIT APPLICATION
# -------------------------------------------------
def main():
    st.title("Test import")
    st.subheader("Build a test from a Word document")

    uploaded = st.file_uploader("Quiz document", type=["docx"])
    if uploaded is not None:
        import_upload(uploaded)

    quiz = get_quiz()
    if quiz is None:
        st.caption("Upload a .docx file with numbered questions and lettered options.")
        return

    st.info(f"Questions in this test: **{len(quiz.questions)}**")

    for q in list(quiz.questions):
        render_question(q)

    st.markdown("---")
    render_add_question()

    st.markdown("---")
    render_save()


if __name__ == "__main__":
    main()
