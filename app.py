from __future__ import annotations

import logging

import streamlit as st

import config
from agents.browse_session import BrowseSession
from agents.hostel_agent import HostelAgent
from clients.identity_providers import IdentityProvider, get_identity_provider
from clients.token_store import JsonFileTokenStore, MemoryTokenStore, TokenStore
from utils.countries import COUNTRIES
from utils.log import configure_logging
from utils.money import format_usd

logger = logging.getLogger(__name__)

APP_STYLE = """
<style>
:root {
  --bg: #f6f8fb;
  --panel: #ffffff;
  --text: #0f172a;
  --muted: #475569;
  --accent: #ea580c;
}
.main .block-container {
  padding: 1.5rem 2rem 3rem;
  background: var(--bg);
}
.hero {
  background: linear-gradient(135deg, rgba(37,99,235,0.16), rgba(234,88,12,0.12));
  border: 1px solid rgba(37,99,235,0.12);
  padding: 1.25rem 1.5rem;
  border-radius: 14px;
  margin-bottom: 1rem;
}
.hero h1 {
  margin: 0;
  color: var(--text);
}
.hero p {
  margin: 0.25rem 0 0;
  color: var(--muted);
}
.hostel-meta {
  color: var(--muted);
  font-size: 0.9rem;
}
</style>
"""

# widget keys
INCOME_KEY = "income_text"
COUNTRIES_KEY = "countries"


@st.cache_resource
def get_agent() -> HostelAgent:
    return HostelAgent()


@st.cache_resource
def get_token_store() -> TokenStore:
    if config.MAGIC_LINK_STORE_PATH:
        return JsonFileTokenStore(config.MAGIC_LINK_STORE_PATH)
    return MemoryTokenStore()


@st.cache_resource
def get_provider() -> IdentityProvider:
    return get_identity_provider(store=get_token_store())


def get_session() -> BrowseSession:
    if "browse" not in st.session_state:
        st.session_state.browse = BrowseSession()
    return st.session_state.browse


def sign_out(session: BrowseSession) -> None:
    session.sign_out()
    st.session_state[INCOME_KEY] = ""
    st.session_state[COUNTRIES_KEY] = []


def render_oauth_sign_in(provider, session: BrowseSession) -> None:
    if st.user.is_logged_in:
        try:
            session.sign_in(provider.identity_from_claims(dict(st.user)))
        except ValueError as exc:
            st.error(str(exc))
            return
        st.rerun()

    st.button(
        f"Sign in with {provider.label}",
        on_click=st.login,
        args=[provider.key],
        type="primary",
        use_container_width=True,
    )


def render_magic_link_sign_in(provider, session: BrowseSession) -> None:
    error = session.complete_magic_link(provider, st.query_params)
    if error:
        st.error(error)
    elif session.user is not None:
        st.rerun()

    with st.form("magic_link"):
        email = st.text_input("Email", placeholder="you@example.com")
        submitted = st.form_submit_button("Send sign-in link", type="primary", use_container_width=True)
    if submitted:
        try:
            link = provider.issue(email)
        except ValueError as exc:
            st.error(str(exc))
        else:
            minutes = int(provider.ttl.total_seconds() // 60)
            st.success(f"Sign-in link for {link.email} is ready. It expires in {minutes} minutes.")
            st.markdown(f"[Open sign-in link]({link.url})")


def render_sign_in(provider, session: BrowseSession) -> None:
    st.markdown(
        """
        <div class="hero">
          <h1>HostelList</h1>
          <p>Find affordable hostels in Mexico, Colombia, Brazil, Vietnam, and Thailand</p>
        </div>
        """,
        unsafe_allow_html=True,
    )
    if provider.kind == "oauth":
        render_oauth_sign_in(provider, session)
    else:
        render_magic_link_sign_in(provider, session)


def render_hostels(session: BrowseSession) -> None:
    if session.listings:
        columns = st.columns(3)
        for idx, hostel in enumerate(session.listings):
            with columns[idx % 3].container(border=True):
                st.image(hostel.image, use_container_width=True)
                st.markdown(f"**{hostel.name}**")
                st.markdown(
                    f'<span class="hostel-meta">{hostel.location}, {hostel.country}</span>',
                    unsafe_allow_html=True,
                )
                st.markdown(f"**${hostel.price:.0f}/night** · ⭐ {hostel.rating}")
                st.caption(f"30-day total: ${hostel.stay_total:.0f}")
                st.link_button("Book on HostelWorld", hostel.booking_url, use_container_width=True)
    elif session.searched and session.income is not None and not session.loading:
        st.info("No hostels found within your budget. Try increasing your monthly income or check back later.")


def render_main(provider, session: BrowseSession) -> None:
    left, right = st.columns([3, 1])
    left.markdown("### HostelList")
    with right:
        st.caption(f"Welcome, {session.user.name}")
        if st.button("Sign Out"):
            sign_out(session)
            if provider.kind == "oauth":
                st.logout()
            st.rerun()

    with st.container(border=True):
        st.markdown("#### Enter Your Monthly Income")
        st.text_input("Monthly income in USD", key=INCOME_KEY, placeholder="Monthly income in USD")
        st.multiselect("Countries", COUNTRIES, key=COUNTRIES_KEY)
        session.income_text = st.session_state.get(INCOME_KEY, "")
        session.countries = list(st.session_state.get(COUNTRIES_KEY, []))

        budget = session.budget
        if budget is not None:
            st.caption(f"Budget for 30-day stay: {format_usd(budget.total)} (up to ${budget.daily_ceiling}/night)")
        elif session.income_text:
            st.caption("Enter a non-negative number to see your budget.")

        if st.button("Find Hostels", disabled=not session.can_search(), type="primary"):
            with st.spinner("Loading..."):
                session.search(get_agent())

    render_hostels(session)


def main() -> None:
    configure_logging()
    st.set_page_config(page_title="HostelList - Find Affordable Hostels", page_icon="🛏️", layout="wide")
    st.markdown(APP_STYLE, unsafe_allow_html=True)

    provider = get_provider()
    session = get_session()
    if session.user is None:
        render_sign_in(provider, session)
    else:
        render_main(provider, session)


main()
