import os
import sys

from app.core.database import get_database
from app.services.marks_ingest import process_marks_csv
from app.services.marks_service import MarksService


def main():
    csv_path = sys.argv[1] if len(sys.argv) > 1 else "test_marks.csv"
    if not os.path.exists(csv_path):
        print(f"Error: {csv_path} not found.")
        return

    print(f"Reading {csv_path}...")
    with open(csv_path, "rb") as f:
        file_content = f.read()

    print("Processing marks and inserting into MongoDB...")
    result = process_marks_csv(file_content, MarksService(get_database), faculty_id="seed")

    print(f"Result: {result.message}")
    for err in result.errors or []:
        print(f"  skipped {err.get('usn', '?')}: {err.get('errors') or err.get('general')}")


if __name__ == "__main__":
    main()
