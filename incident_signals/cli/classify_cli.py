"""Terminal REPL that classifies incident reports as they are typed.

Usage:
    python -m incident_signals.cli.classify_cli
"""

from __future__ import annotations

from incident_signals.detection.analysis import IncidentAnalysis, analyze_incident_text
from incident_signals.detection.vocabulary import display_name


def format_analysis(a: IncidentAnalysis) -> str:
    lines = ["CLASSIFICATION"]
    callsign = a.callsign or "(none)"
    lines.append(f"  Callsign: {callsign} ({a.callsign_confidence:.0%})")
    if len(a.callsigns) > 1:
        lines.append(f"  Also mentioned: {', '.join(c for c in a.callsigns if c != a.callsign)}")
    if a.incident_type:
        lines.append(f"  Type: {display_name(a.incident_type)} ({a.type_confidence:.0%}, {a.type_source})")
    else:
        lines.append(f"  Type: (needs confirmation, {a.type_confidence:.0%})")
    if a.alternative_types:
        lines.append(f"  Alternatives: {', '.join(a.alternative_types)}")
    lines.append(f"  Occurrence: {a.occurrence}")
    lines.append(f"  Priority: {a.priority.upper()} ({a.priority_confidence:.0%})")
    if a.reasoning:
        lines.append(f"  Why: {a.reasoning}")
    return "\n".join(lines)


def main() -> None:
    print("=" * 60)
    print("  Incident Signal Classifier  (type 'quit' to exit)")
    print("=" * 60)
    print()

    while True:
        try:
            msg = input("Report > ").strip()
        except (KeyboardInterrupt, EOFError):
            print("\nGoodbye!")
            break

        if not msg:
            continue
        if msg.lower() in ("quit", "exit", "q"):
            print("Goodbye!")
            break

        print()
        print(format_analysis(analyze_incident_text(msg)))
        print()


if __name__ == "__main__":
    main()
