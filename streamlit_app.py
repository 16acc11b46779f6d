import uuid
from typing import Any, Dict, List

import streamlit as st
from streamlit_js_eval import streamlit_js_eval

from checkin_client import create_view_model
from checkin_client.api.client import CheckinServiceClient
from checkin_client.core.formatting import build_card, format_capture_line, markdown_link
from checkin_client.core.geolocation import browser_expression, result_from_browser
from checkin_client.core.view_model import CheckinViewModel


def view_model() -> CheckinViewModel:
    return st.session_state.view_model


def ensure_session_state() -> None:
    if "view_model" not in st.session_state:
        vm = create_view_model(st.session_state.get("api_base_url"))
        vm.load()
        st.session_state.view_model = vm
    if "api_base_url" not in st.session_state:
        st.session_state.api_base_url = view_model().client.base_url
    if "pending_location" not in st.session_state:
        st.session_state.pending_location = None
    for key in ("name_input", "note_input", "link_input"):
        if key not in st.session_state:
            st.session_state[key] = ""


def _on_base_url_change() -> None:
    vm = view_model()
    vm.client.session.close()
    vm.client = CheckinServiceClient(st.session_state.api_base_url, timeout=vm.client.timeout)
    vm.load()


def sidebar_controls() -> None:
    st.sidebar.header("Settings")
    st.sidebar.text_input("API Base URL", key="api_base_url", on_change=_on_base_url_change)
    if st.sidebar.button("Refresh"):
        view_model().load()


def _on_create_child() -> None:
    vm = view_model()
    vm.name = st.session_state.name_input
    vm.create_child()
    st.session_state.name_input = vm.name


def _on_get_location() -> None:
    request = view_model().request_location()
    if request is not None:
        # A fresh key issues a new browser request; an older one still in flight is ignored
        st.session_state.pending_location = {"key": f"geo-{uuid.uuid4()}", "request": request}


def _on_share() -> None:
    vm = view_model()
    vm.note = st.session_state.note_input
    vm.link = st.session_state.link_input
    vm.send_checkin()
    st.session_state.note_input = vm.note
    st.session_state.link_input = vm.link


def resolve_pending_location() -> None:
    pending: Dict[str, Any] = st.session_state.pending_location
    if not pending:
        return
    payload = streamlit_js_eval(js_expressions=browser_expression(pending["request"]), key=pending["key"])
    if payload is None:
        return
    st.session_state.pending_location = None
    view_model().apply_location(result_from_browser(payload))
    st.rerun()


def create_child_section() -> None:
    st.subheader("Create Child Profile")
    with st.form("child_form"):
        col_name, col_add = st.columns([4, 1])
        with col_name:
            st.text_input("Child name", key="name_input", placeholder="Child name", label_visibility="collapsed")
        with col_add:
            st.form_submit_button("Add", on_click=_on_create_child)


def share_section() -> None:
    vm = view_model()
    st.subheader("Share a Check-in")

    names = {c.id: c.name for c in vm.children}
    options: List[Any] = [""] + [c.id for c in vm.children]
    index = options.index(vm.selected_child) if vm.selected_child in options else 0
    vm.selected_child = st.selectbox(
        "Profile",
        options,
        index=index,
        format_func=lambda cid: "Select profile" if cid == "" else names.get(cid, str(cid)),
        label_visibility="collapsed",
    )

    col_loc, col_note, col_link, col_share = st.columns([1, 2, 2, 1])
    with col_loc:
        st.button("Get Location", on_click=_on_get_location)
    with col_note:
        st.text_input("Note", key="note_input", placeholder="Optional note", label_visibility="collapsed")
    with col_link:
        st.text_input(
            "Link", key="link_input", placeholder="Optional link (e.g., YouTube)", label_visibility="collapsed"
        )
    with col_share:
        st.button("Share", on_click=_on_share)

    resolve_pending_location()

    if vm.coords is not None:
        st.caption(format_capture_line(vm.coords))
    if vm.status:
        st.write(vm.status)


def latest_section() -> None:
    vm = view_model()
    st.subheader("Latest Check-ins")
    for record in vm.latest:
        card = build_card(record, vm.children)
        with st.container(border=True):
            col_child, col_time = st.columns(2)
            col_child.caption(card.child)
            col_time.caption(card.created_at)
            st.markdown(f"`{card.coords_line}`")
            if card.note_line:
                st.text(card.note_line)
            if card.link:
                st.markdown(markdown_link("Link", card.link))
    if not vm.latest:
        st.caption("No check-ins yet.")


def main() -> None:
    st.set_page_config(page_title="Consent-based Check-in", page_icon="📍", layout="centered")
    p = {
        "app_from": "#eff6ff",
        "app_to": "#ecfdf5",
        "text": "#0f172a",
        "card": "#ffffff",
        "border": "#e2e8f0",
        "muted": "#4b5563",
    }

    st.markdown(
        f"""
        <style>
        .stApp {{ background: linear-gradient(135deg, {p['app_from']}, {p['app_to']}); color: {p['text']}; }}
        h1, h2, h3 {{ color: {p['text']}; }}
        div[data-testid="stVerticalBlockBorderWrapper"] {{ background: {p['card']}; border-color: {p['border']}; }}
        .subtitle {{ color: {p['muted']}; font-size: 14px; }}
        </style>
        """,
        unsafe_allow_html=True,
    )
    ensure_session_state()
    sidebar_controls()
    st.title("Consent-based Check-in")
    st.markdown(
        '<p class="subtitle">Child can choose to share location and a link. No hidden tracking.</p>',
        unsafe_allow_html=True,
    )
    create_child_section()
    share_section()
    latest_section()


if __name__ == "__main__":
    main()
