from __future__ import annotations
import json, os, sys
from dotenv import load_dotenv, find_dotenv

from play2win.aggregation import comprehensive_data_from_text
from play2win.errors import Play2WinError
from play2win.tabular_loader import read_source_text


def main():
    load_dotenv(find_dotenv(usecwd=True))
    path = sys.argv[1] if len(sys.argv) > 1 else os.getenv("MATCH_DATA_PATH", "match_data.csv")
    try:
        data = comprehensive_data_from_text(read_source_text(path), delimiter=os.getenv("CSV_DELIMITER", ","))
    except Play2WinError as exc:
        print(str(exc), file=sys.stderr)
        sys.exit(1)

    print("Key stats:", json.dumps(data["keyStats"], indent=2))
    for opponent, row in data["teamComparison"].items():
        print(f"{opponent:<24} games={row['gamesPlayed']} goals={row['totalGoals']} "
              f"shots={row['totalShots']} conv={row['conversionRate']:.1f}%")


if __name__ == "__main__":
    main()
