import streamlit as st

import widgets
from backend_client import BackendClient, RequestError
from config import QUIZ_DEFAULT_BACKEND, configure_logging, get_settings
from quiz_controller import QuizController, QuizPhase

settings = get_settings(QUIZ_DEFAULT_BACKEND)
configure_logging(settings.log_level)

st.set_page_config(page_title="Career Hub", page_icon="🎓", layout="centered")

# Initialize session state
if "quiz" not in st.session_state:
    st.session_state.client = BackendClient(settings.backend_url)
    st.session_state.quiz = QuizController(st.session_state.client)


# --- Home Page ---
def home_page():
    st.title("Student Career Hub")
    st.write("Generate learning plans, take quick quizzes, and earn shareable certificates.")


# --- Result Panel ---
def result_panel(controller: QuizController, client: BackendClient):
    result = controller.state.result
    icon = "✅" if result.passed else "❌"
    st.subheader(f"{icon} {'Passed' if result.passed else 'Try again'}")
    st.write(f"Score: {result.score:g}% • {result.correct}/{result.total} correct")

    url = controller.certificate_url()
    if url:
        st.success("Certificate issued!")
        st.markdown(f"[View certificate JSON]({url})")
        if st.button("Show certificate here", key="show_certificate"):
            try:
                st.json(client.get_certificate(result.certificate_id))
            except RequestError as e:
                st.error(f"Could not load certificate: {e}")


# --- Quiz Page ---
def quiz_page(controller: QuizController, client: BackendClient):
    st.title("Skill Quiz")
    st.caption("Test yourself and earn a shareable certificate if you pass.")

    col1, col2 = st.columns(2)
    with col1:
        topic = st.text_input("Choose a topic", value=controller.state.topic,
                              placeholder="e.g. React, Data Science", key="topic_input")
    with col2:
        name = st.text_input("Your name (for certificate)", value=controller.state.name,
                             placeholder="Jane Doe", key="name_input")
    controller.set_topic(topic)
    controller.set_name(name)

    loading = controller.state.phase == QuizPhase.LOADING
    if st.button("Loading..." if loading else "Start quiz", key="start_quiz",
                 disabled=controller.state.busy):
        with st.spinner("Loading quiz..."):
            controller.start_quiz()
        st.rerun()

    if controller.state.error:
        st.error(controller.state.error)

    quiz = controller.state.quiz
    if quiz is not None:
        locked = controller.state.phase == QuizPhase.SUBMITTED
        for idx, question in enumerate(quiz.questions, start=1):
            with st.container(border=True):
                st.markdown(f"**{idx}.**")
                choice = widgets.radio(question, controller.state.answers.get(question.id),
                                       key=f"q-{controller.state.seq}-{question.id}",
                                       disabled=locked)
            if choice is not None and choice != controller.state.answers.get(question.id):
                controller.select_answer(question.id, choice)

        submitting = controller.state.phase == QuizPhase.SUBMITTING
        label = "Submitting..." if submitting else "Submit and get result"
        if st.button(label, key="submit_quiz", disabled=not controller.can_submit,
                     type="primary"):
            with st.spinner("Submitting..."):
                controller.submit_quiz()
            st.rerun()

    if controller.state.result is not None:
        result_panel(controller, client)


# --- Page Routing ---
page = widgets.layout(settings.backend_url)
if page == "Quiz":
    quiz_page(st.session_state.quiz, st.session_state.client)
else:
    home_page()
