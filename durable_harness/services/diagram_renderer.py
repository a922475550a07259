"""PlantUML activity rendering of a recorded call trace.

Updates:
    v0.1.0 - 2026-10-19 - Linear start-to-end flow from the call recorder.
"""

from __future__ import annotations

from .call_recorder import CallRecorder, CallRecord

START_TOKEN = "(*)"
END_LINE = "--> (*)"
EMPTY_FLOW_LINE = f"{START_TOKEN} {END_LINE}"


class DiagramRenderer:
    """Turns the calls recorded during one run into a linear flow description."""

    def render(self, recorder: CallRecorder) -> list[str]:
        """Drain ``recorder`` and describe the calls as consecutive transitions.

        The first transition leaves the start token, later ones continue from
        the previous node, and a closing line reaches the end token. An empty
        recorder yields a single start-to-end transition.

        Args:
            recorder (CallRecorder): Recorder to drain.

        Returns:
            list[str]: One line per call plus the closing transition.
        """

        return self.render_records(recorder.drain_all())

    def render_records(self, records: list[CallRecord]) -> list[str]:
        lines: list[str] = []
        source = START_TOKEN
        for record in records:
            annotation = (record.annotation or "").strip()
            description = f"[{annotation}]" if annotation else ""
            lines.append(f'{source} --> {description} "{record.name}"')
            source = ""
        lines.append(END_LINE if records else EMPTY_FLOW_LINE)
        return lines

    def render_document(self, recorder: CallRecorder) -> str:
        """Render a complete ``@startuml`` document for the drained calls."""

        body = self.render(recorder)
        return "\n".join(["@startuml", *body, "@enduml"])
