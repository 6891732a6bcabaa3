#!/usr/bin/env python3
"""
Print the current regional rankings.

Scores any unscored applications and stores them, same as the admin
rankings endpoint.

Usage:
    python scripts/rank_regions.py
    python scripts/rank_regions.py --region "Region 4"
"""
import sys
sys.path.insert(0, '.')

import argparse

from app.db.database import get_db_session
from app.models.applicant import REGIONS
from app.services.application_repository import ApplicationRepository
from app.services.ranking_service import RankingService
from app.utils.formatting import score_band


def main():
    parser = argparse.ArgumentParser(description="Rank applications by region")
    parser.add_argument("--region", choices=REGIONS, help="Only rank this region")
    args = parser.parse_args()

    with get_db_session() as db:
        ranked = RankingService(ApplicationRepository(db)).get_rankings(args.region)

    if not ranked:
        print("No applications found.")
        return

    for region, applicants in ranked.items():
        print("=" * 60)
        print(f"{region} ({len(applicants)} applications)")
        print("=" * 60)
        for position, applicant in enumerate(applicants, start=1):
            print(
                f"{position:>3}. {applicant.name:<30} score {applicant.ai_score:>3} "
                f"({score_band(applicant.ai_score)}), tiebreaker {applicant.tiebreaker}"
            )
        print()


if __name__ == "__main__":
    main()
