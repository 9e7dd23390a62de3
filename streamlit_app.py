import streamlit as st

import widgets
from app_context import AppContext
from auth_gate import Anonymous, AuthGate, LOGIN, Verifying
from backend_client import BackendClient
from config import CAREER_HUB_DEFAULT_BACKEND, configure_logging, get_settings
from session_store import SessionStore
from view_controller import QUICK_TOPICS, ResultsError, ResultsLoading, ResultsPlan, ViewController

settings = get_settings(CAREER_HUB_DEFAULT_BACKEND)
configure_logging(settings.log_level)

st.set_page_config(page_title="Student Career Hub", page_icon="🧭", layout="wide")


@st.cache_resource
def get_store(db_path: str) -> SessionStore:
    return SessionStore(db_path)


# Initialize session state once per browser session
if "context" not in st.session_state:
    context = AppContext.load(get_store(settings.session_db_path))
    client = BackendClient(settings.backend_url, token=context.token)
    st.session_state.context = context
    st.session_state.auth = AuthGate(context, client)
    st.session_state.view = ViewController(client)
    st.session_state.auth.start()


# --- Auth Page ---
def login_form(auth: AuthGate):
    email = st.text_input("Email", key="login_email")
    password = st.text_input("Password", type="password", key="login_password")
    if st.button("Login", key="login_submit", type="primary"):
        auth.login(email, password)
        st.rerun()


def signup_form(auth: AuthGate):
    first_name = st.text_input("First name", key="signup_first_name")
    last_name = st.text_input("Last name", key="signup_last_name")
    email = st.text_input("Email", key="signup_email")
    password = st.text_input("Password", type="password", key="signup_password")
    if st.button("Create account", key="signup_submit", type="primary"):
        auth.signup(first_name, last_name, email, password)
        st.rerun()


def auth_page(auth: AuthGate, context: AppContext):
    state = auth.state
    if isinstance(state, Verifying):
        widgets.skeleton()
        return

    on_login = not isinstance(state, Anonymous) or state.view == LOGIN
    _, middle, _ = st.columns([1, 2, 1])
    with middle:
        st.header("Welcome back" if on_login else "Create your account")
        if on_login:
            login_form(auth)
        else:
            signup_form(auth)
        if isinstance(state, Anonymous) and state.error:
            st.error(state.error)

        col1, col2 = st.columns(2)
        with col1:
            toggle_label = "Create account" if on_login else "Have an account? Login"
            if st.button(toggle_label, key="auth_toggle"):
                auth.toggle_view()
                st.rerun()
        with col2:
            widgets.theme_toggle(context, key="auth_theme")


# --- Results Page ---
def results_page(view: ViewController):
    state = view.state
    if isinstance(state, ResultsLoading):
        widgets.skeleton()
    elif isinstance(state, ResultsError):
        widgets.card("Error", state.message)
    elif isinstance(state, ResultsPlan):
        widgets.plan_summary(state.plan)
        widgets.roadmap(state.plan)
        widgets.step_details(state.plan)


# --- Page Routing ---
context: AppContext = st.session_state.context
auth: AuthGate = st.session_state.auth
view: ViewController = st.session_state.view

if not auth.authenticated:
    auth_page(auth, context)
else:
    query = widgets.header(context)
    if isinstance(view.state, (ResultsLoading, ResultsError, ResultsPlan)):
        results_page(view)
    else:
        hero_query = widgets.home(QUICK_TOPICS)
        if hero_query is not None:
            query = hero_query

    if query is not None:
        with st.spinner("Generating your learning plan..."):
            view.search(query)
        st.rerun()
