"""
Keyboard-navigation results: flatten the per-check groups into findings.
"""

from typing import Any, Dict, List

from ..issue import KeyboardFinding

CHECK_GROUPS = (
    "interactiveElements",
    "focusIndicators",
    "keyboardTraps",
    "skipLinks",
    "focusManagement",
)


def collect_keyboard_findings(results: Dict[str, Any]) -> List[KeyboardFinding]:
    """All findings from a keyboard scan, in check-group order."""
    results = results if isinstance(results, dict) else {}
    findings = []
    for group in CHECK_GROUPS:
        section = results.get(group)
        if not isinstance(section, dict):
            continue
        findings.extend(KeyboardFinding.from_dict(raw) for raw in section.get("issues") or [])
    return findings
