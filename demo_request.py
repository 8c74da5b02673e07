#!/usr/bin/env python3
"""Demo-Request: Proofreading-Durchlauf, Fixes akzeptieren, Markdown-Export"""

import json
import sys

import requests

BASE_URL = "http://localhost:8000"

transcript = "\n".join(
    [
        "Speaker 1: i met john smith yesterday",
        "Speaker 2: Did he bring todays report",
        "Speaker 1: He went home but he came back later.",
    ]
)

print("=" * 70)
print("INPUT:")
print("=" * 70)
print(transcript)
print()

try:
    response = requests.post(f"{BASE_URL}/proofread", json={"transcript": transcript}, timeout=60)
    response.raise_for_status()
    result = response.json()
except requests.exceptions.ConnectionError:
    print(f"❌ Server nicht erreichbar unter {BASE_URL}")
    print("   Bitte starten Sie den Server mit: uvicorn app.server:app")
    sys.exit(1)
except Exception as e:
    print(f"❌ Fehler: {e}")
    sys.exit(1)

issues = result.get("issues", [])

print("=" * 70)
print(f"OUTPUT: ISSUES ({len(issues)} gefunden, {result.get('total_lines')} Zeilen)")
print("=" * 70)
for issue in issues:
    print(f"  Zeile {issue['line_number']} [{issue['severity']}] {issue['category']}")
    print(f"    Beschreibung: {issue['description']}")
    print(f"    Fix:          {issue['suggested_fix']}")
    print(f"    Confidence:   {issue['confidence']:.2f}")
    print()

# Alle Issues akzeptieren (ID = line_number:category:description)
accepted_ids = [f"{i['line_number']}:{i['category']}:{i['description']}" for i in issues]
payload = {"transcript": transcript, "issues": issues, "accepted_ids": accepted_ids}

try:
    applied = requests.post(f"{BASE_URL}/apply-fixes", json=payload, timeout=60)
    applied.raise_for_status()
    applied = applied.json()
    report = requests.post(f"{BASE_URL}/export/markdown", json=payload, timeout=60)
    report.raise_for_status()
except Exception as e:
    print(f"❌ Fehler: {e}")
    sys.exit(1)

print("=" * 70)
print("OUTPUT: KORRIGIERTES TRANSKRIPT")
print("=" * 70)
print(applied["corrected_transcript"])
print()
print(f"  Geänderte Zeilen: {json.dumps(applied['changed_lines'])}")
print(f"  Angewendete Fixes: {applied['applied']}")
print()

print("=" * 70)
print("OUTPUT: MARKDOWN-EXPORT")
print("=" * 70)
print(report.text)

print("=" * 70)
print("✅ Demo abgeschlossen")
print("=" * 70)
