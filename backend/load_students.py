"""
Data Loader Script - Registers the students in students.json via the API.

Each record is POSTed to /api/students. Records whose email is already
registered are reported as skipped, not as failures.

Usage:
    python load_students.py                              # Uses default URL
    python load_students.py http://localhost:8000         # Custom API URL
    python load_students.py http://backend:8000 data.json # Custom URL and file
"""

import json
import sys
import os

import httpx
from dotenv import load_dotenv


def load_records(path):
    with open(path, 'r') as f:
        records = json.load(f)
    if not isinstance(records, list):
        raise ValueError(f"{path} must contain a JSON array of students")
    return records


def post_students(api_url, records, transport=None):
    """POST each record and return (status, record, body) tuples."""
    results = []
    with httpx.Client(base_url=api_url, timeout=30.0, transport=transport) as client:
        for record in records:
            payload = {
                "name": record.get("name"),
                "email": record.get("email"),
                "phone": record.get("phone"),
                "gender": record.get("gender", "Male"),
            }
            resp = client.post("/api/students", json=payload)
            try:
                body = resp.json()
            except ValueError:
                body = {"error": resp.text}
            results.append((resp.status_code, payload, body))
    return results


def main():
    load_dotenv()
    api_url = sys.argv[1] if len(sys.argv) > 1 else os.getenv("STUDENTS_API_URL", "http://localhost:8000")

    data_file = sys.argv[2] if len(sys.argv) > 2 else os.path.join(
        os.path.dirname(os.path.abspath(__file__)), "students.json")
    if not os.path.exists(data_file):
        print(f"Error: Could not find {data_file}")
        sys.exit(1)

    print(f"Loading data from: {data_file}")
    records = load_records(data_file)
    print(f"Found {len(records)} students to register")
    print(f"Sending to: {api_url}/api/students")
    print()

    try:
        results = post_students(api_url, records)
    except httpx.HTTPError as e:
        print(f"Error: could not reach {api_url}: {e}")
        sys.exit(1)

    created = [r for r in results if r[0] == 201]
    skipped = [r for r in results if r[0] == 400]
    failed = [r for r in results if r[0] not in (201, 400)]

    print("=" * 60)
    print("REGISTRATION SUMMARY")
    print("=" * 60)
    print(f"  Total Received:  {len(results)}")
    print(f"  Created:         {len(created)}")
    print(f"  Skipped:         {len(skipped)}")
    print(f"  Errors:          {len(failed)}")
    print("=" * 60)
    print()

    for status, payload, body in results:
        if status == 201:
            print(f"  ✅ {payload['email']}: created (id: {body.get('id', '?')})")
        elif status == 400:
            print(f"  🔁 {payload['email']}: skipped ({body.get('error', '?')})")
        else:
            print(f"  ❌ {payload['email']}: HTTP {status} ({body.get('error', '?')})")

    print()
    if failed:
        sys.exit(1)


if __name__ == "__main__":
    main()
