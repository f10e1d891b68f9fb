"""Resolution reporting in text, JSON and YAML formats."""

import json
from collections import Counter
from typing import Any, Dict, List, Sequence

import yaml

from revdns.models.resolution import OutcomeKind, ResolutionOutcome


OUTPUT_FORMATS = ("text", "json", "yaml")


class ResolutionReporter:
    """Renders resolution outcomes for display or machine consumption."""

    @staticmethod
    def summarize(outcomes: Sequence[ResolutionOutcome]) -> Dict[str, int]:
        """Count outcomes per kind.

        Returns:
            Dict[str, int]: total plus one counter per OutcomeKind.
        """
        counts = Counter(outcome.kind for outcome in outcomes)
        return {
            "total": len(outcomes),
            "resolved": counts[OutcomeKind.RESOLVED],
            "unresolvable": counts[OutcomeKind.ADDRESS_UNRESOLVABLE],
            "no_aliases": counts[OutcomeKind.NO_ALIASES_AVAILABLE],
            "invalid": counts[OutcomeKind.INVALID_ADDRESS],
        }

    @staticmethod
    def to_document(outcomes: Sequence[ResolutionOutcome]) -> Dict[str, Any]:
        return {
            "results": [outcome.to_json() for outcome in outcomes],
            "summary": ResolutionReporter.summarize(outcomes),
        }

    @staticmethod
    def generate_json_report(outcomes: Sequence[ResolutionOutcome]) -> str:
        """Generate JSON report.

        Args:
            outcomes: Outcomes in the order they should be listed.

        Returns:
            str: Pretty-printed JSON string with sorted keys for determinism.

        Example:
            >>> print(ResolutionReporter.generate_json_report(outcomes))
            {
              "results": [...],
              "summary": {...}
            }
        """
        return json.dumps(
            ResolutionReporter.to_document(outcomes), indent=2, sort_keys=True
        )

    @staticmethod
    def generate_yaml_report(outcomes: Sequence[ResolutionOutcome]) -> str:
        """Generate YAML report with the same structure as the JSON report."""
        return yaml.safe_dump(
            ResolutionReporter.to_document(outcomes),
            default_flow_style=False,
            sort_keys=True,
        )

    @staticmethod
    def format_outcome(outcome: ResolutionOutcome) -> List[str]:
        """Render one outcome as console lines.

        Args:
            outcome: Outcome to render.

        Returns:
            List[str]: Lines without trailing newlines.
        """
        if outcome.is_invalid():
            return [f"Invalid IPv4 address {outcome.address}"]
        if outcome.is_unresolvable():
            return [f"Cannot resolve IP address {outcome.address}"]
        if outcome.has_no_aliases():
            return [
                f"First canonical host name: {outcome.canonical_name}",
                f"No aliases for IP address {outcome.address}",
            ]

        lines = [f"First canonical host name: {outcome.canonical_name}"]
        if not outcome.aliases:
            lines.append("No aliases.")
            return lines

        names = outcome.result.all_names()
        lines.append(f"Found {len(names)} hosts for IP address {outcome.address}:")
        lines.extend(names)
        return lines

    @staticmethod
    def generate_text_report(outcomes: Sequence[ResolutionOutcome]) -> str:
        """Render outcomes as console text, one block per address."""
        blocks = [
            "\n".join(ResolutionReporter.format_outcome(outcome))
            for outcome in outcomes
        ]
        return "\n\n".join(blocks) + "\n"

    @staticmethod
    def render(outcomes: Sequence[ResolutionOutcome], output_format: str) -> str:
        """Render outcomes in one of OUTPUT_FORMATS.

        Raises:
            ValueError: If output_format is unknown.
        """
        if output_format == "json":
            return ResolutionReporter.generate_json_report(outcomes) + "\n"
        if output_format == "yaml":
            return ResolutionReporter.generate_yaml_report(outcomes)
        if output_format == "text":
            return ResolutionReporter.generate_text_report(outcomes)
        raise ValueError(f"Unknown output format: {output_format}")
