#!/usr/bin/env python3
"""
Component Options Demo: Selection → Options → Edit → Write

Shows the full dialog round trip against the example document:
1. Resolve the selected cabinet
2. Project its options for the dialog
3. Apply a valid edit
4. Apply an edit with one bad value (rolled back)
"""

import json
import logging

from compopts.bridge import ComponentOptionsBridge
from compopts.examples import build_example_document


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    document = build_example_document()
    bridge = ComponentOptionsBridge(document)

    print("=" * 80)
    print("COMPONENT OPTIONS DEMO: Selection → Options → Edit → Write")
    print("=" * 80)

    # =========================================================================
    # STEP 1-2: Open the dialog
    # =========================================================================
    print("\n1. OPENING DIALOG...")
    payload = bridge.open()
    print(f"   ✓ Definition: {payload['definition']}")
    print(json.dumps(payload["options"], indent=2))

    # =========================================================================
    # STEP 3: Valid edit
    # =========================================================================
    print("\n2. APPLYING VALID EDIT...")
    response = bridge.apply({
        "dynamic_attributes": {"lenx": "80", "has_door": False},
        "pricing": {"price": "149.50"},
    })
    print(f"   ✓ Success: {response['success']}")
    for r in response["results"]:
        print(f"      - {r['dictionary']}/{r['key']}: {r['outcome']} ({r['value']!r})")

    # =========================================================================
    # STEP 4: Edit with a bad value
    # =========================================================================
    print("\n3. APPLYING EDIT WITH A BAD LENGTH...")
    response = bridge.apply({
        "dynamic_attributes": {"leny": "deep", "shelves": 6},
    })
    print(f"   ✓ Success: {response['success']}")
    for r in response["results"]:
        detail = r["error"] or repr(r["value"])
        print(f"      - {r['dictionary']}/{r['key']}: {r['outcome']} ({detail})")

    print("\n" + "=" * 80)
    print("Options after both edits:")
    print(json.dumps(bridge.refresh()["options"], indent=2))
    print("=" * 80)


if __name__ == "__main__":
    main()
