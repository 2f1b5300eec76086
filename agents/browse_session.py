# agents/browse_session.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, MutableMapping, Optional

from agents.budget_calculator_agent import BudgetCalculatorAgent
from agents.hostel_agent import HostelAgent
from clients.identity_providers import MagicLinkError, MagicLinkIdentityProvider
from models.budget import StayBudget
from models.hostel import HostelListing
from models.identity import Identity
from models.preferences import SearchPreferences
from utils.money import parse_income

logger = logging.getLogger(__name__)


@dataclass
class BrowseSession:
    """
    Transient page state for one signed-in visitor. Kept in st.session_state,
    but free of Streamlit so the rules can be tested directly.
    """

    user: Optional[Identity] = None
    income_text: str = ""
    countries: List[str] = field(default_factory=list)
    listings: List[HostelListing] = field(default_factory=list)
    loading: bool = False
    searched: bool = False

    @property
    def income(self) -> Optional[float]:
        return parse_income(self.income_text)

    @property
    def budget(self) -> Optional[StayBudget]:
        if self.income is None:
            return None
        return BudgetCalculatorAgent().run(self.income)

    def can_search(self) -> bool:
        return (
            self.user is not None
            and self.income is not None
            and bool(self.countries)
            and not self.loading
        )

    def search(self, agent: HostelAgent) -> List[HostelListing]:
        if not self.can_search():
            return self.listings

        self.loading = True
        try:
            result = agent.run(SearchPreferences(
                monthly_income=self.income,
                countries=list(self.countries),
            ))
            self.listings = result.listings
            self.searched = True
        finally:
            self.loading = False
        logger.info("Search for %s returned %d hostels", self.user.email, len(self.listings))
        return self.listings

    def sign_in(self, identity: Identity) -> None:
        self.user = identity

    def complete_magic_link(
        self,
        provider: MagicLinkIdentityProvider,
        params: MutableMapping[str, str],
    ) -> Optional[str]:
        """
        Signs in from the token/email query parameters of a sign-in link.
        The parameters are cleared whether or not the link checks out, so a
        rejected link is not re-checked on the next rerun. Returns the error
        message for a rejected link.
        """
        token = params.get("token")
        if not token:
            return None
        email = params.get("email", "")
        params.clear()

        try:
            identity = provider.verify(token, email)
        except MagicLinkError as exc:
            return str(exc)
        self.sign_in(identity)
        return None

    def sign_out(self) -> None:
        self.user = None
        self.income_text = ""
        self.countries = []
        self.listings = []
        self.searched = False
        self.loading = False
