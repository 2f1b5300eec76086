# agents/final_output_agent.py
from __future__ import annotations
from typing import List

from models.search import SearchResult
from utils.money import format_usd

class FinalOutputAgent:
    def render(self, result: SearchResult) -> str:
        lines: List[str] = []
        budget = result.budget

        lines.append("✅ HostelList")
        lines.append("")
        lines.append("### Budget")
        lines.append(f"- **Monthly income:** {format_usd(budget.income)}")
        lines.append(f"- **Budget for 30-day stay:** {format_usd(budget.total)}")
        lines.append(f"- **Max per night:** ${budget.daily_ceiling}")
        lines.append(f"- **Countries:** {', '.join(result.countries) if result.countries else '—'}")
        lines.append("")

        lines.append("### Hostels")
        if not result.listings:
            lines.append("- _No hostels found within your budget. Try increasing your monthly income or check back later._")
        else:
            for idx, h in enumerate(result.listings, start=1):
                lines.append(
                    f"{idx}) **{h.name}** | {h.location}, {h.country} | ${h.price:.0f}/night | "
                    f"⭐ {h.rating} | 30-day total: ${h.stay_total:.0f} | [Book on HostelWorld]({h.booking_url})"
                )

        return "\n".join(lines)
