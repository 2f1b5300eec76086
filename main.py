# main.py
from __future__ import annotations
import sys

from agents.final_output_agent import FinalOutputAgent
from agents.hostel_agent import HostelAgent
from utils.countries import COUNTRIES
from utils.log import configure_logging

if __name__ == "__main__":
    configure_logging()
    if len(sys.argv) < 2:
        print(f"usage: python main.py <monthly_income> [country ...]  (countries: {', '.join(COUNTRIES)})")
        sys.exit(2)

    prefs = {
        "monthly_income": sys.argv[1],
        "countries": sys.argv[2:] or COUNTRIES,
    }

    try:
        result = HostelAgent().run(prefs)
    except ValueError as exc:
        print(f"❌ {exc}")
        sys.exit(1)
    print(FinalOutputAgent().render(result))
