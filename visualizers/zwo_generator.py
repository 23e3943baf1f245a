"""Generator rendering workouts as Zwift workout files and summaries."""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import jinja2

from config.settings import OUTPUT_FORMATS, TEMPLATE_DIR
from models.workout import MergedStep, WorkoutDescriptor
from utils.time_parsing import format_seconds

logger = logging.getLogger(__name__)


class ZwoGenerator:
    """Render a WorkoutDescriptor with Jinja2 templates."""

    TEMPLATES = {
        'zwo': 'workout.zwo.xml',
        'summary': 'course_summary.md',
    }

    def __init__(self, template_dir: Optional[Path] = None):
        """Initialize generator.

        Args:
            template_dir: Directory containing the output templates
        """
        self.template_dir = template_dir or TEMPLATE_DIR

        self.jinja_env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(self.template_dir)),
            autoescape=jinja2.select_autoescape(['html', 'xml']),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

        self.jinja_env.filters['format_duration'] = self._format_duration
        self.jinja_env.filters['format_power'] = self._format_power
        self.jinja_env.filters['format_percent'] = self._format_percent
        self.jinja_env.filters['format_clock'] = format_seconds

    def generate(self, workout: WorkoutDescriptor, format: str = 'zwo') -> str:
        """Render a workout.

        Args:
            workout: Finished workout
            format: 'zwo' for the workout file, 'summary' for a Markdown summary

        Returns:
            Rendered content
        """
        if format not in OUTPUT_FORMATS:
            raise ValueError(f"Unsupported format: {format}")

        template = self.jinja_env.get_template(self.TEMPLATES[format])
        return template.render(
            workout=workout,
            steps=self._prepare_steps(workout.steps),
            summary=workout.get_summary(),
        )

    def write(self, workout: WorkoutDescriptor, output_path: Union[str, Path],
              format: str = 'zwo') -> Path:
        """Render a workout and write it to ``output_path``."""
        output_path = Path(output_path)
        content = self.generate(workout, format)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(content, encoding='utf-8')
        logger.info(f"Workout saved to: {output_path}")
        return output_path

    def _prepare_steps(self, steps: List[MergedStep]) -> List[Dict[str, Any]]:
        """Convert steps to whole seconds without accumulating rounding drift.

        Step boundaries are rounded and durations taken as their difference,
        so the written durations always add up to the rounded total. Steps
        that round to zero seconds are not written; their hints move to the
        end of the previous step, or to the start of the next one.
        """
        prepared = []
        pending_hints: List[str] = []
        for step in steps:
            start = int(round(step.start))
            duration = int(round(step.end)) - start

            if duration <= 0:
                texts = [hint.text for hint in step.hints]
                if prepared:
                    last = prepared[-1]
                    last['hints'].extend(
                        {'offset': max(last['duration'] - 1, 0), 'text': text} for text in texts
                    )
                else:
                    pending_hints.extend(texts)
                logger.debug(f"Skipping step at {step.start:g}s, shorter than one second")
                continue

            hints = [{'offset': 0, 'text': text} for text in pending_hints]
            pending_hints = []
            for hint in step.hints:
                offset = int(round(step.start + hint.offset)) - start
                hints.append({'offset': min(max(offset, 0), duration - 1), 'text': hint.text})

            prepared.append({
                'start': start,
                'duration': duration,
                'power': step.power,
                'hints': hints,
            })
        return prepared

    def _format_power(self, power: float) -> str:
        """Format an FTP fraction for the workout file (0.72, 1)."""
        return f"{round(power, 4):g}"

    def _format_percent(self, power: Optional[float]) -> str:
        """Format an FTP fraction as a percentage."""
        if power is None:
            return ""
        return f"{power * 100:.0f}%"

    def _format_duration(self, seconds: float) -> str:
        """Format duration in seconds to human-readable format.

        Args:
            seconds: Duration in seconds

        Returns:
            Formatted duration string
        """
        hours = int(seconds // 3600)
        minutes = int((seconds % 3600) // 60)
        seconds = int(seconds % 60)

        if hours > 0:
            return f"{hours}h {minutes}m {seconds}s"
        elif minutes > 0:
            return f"{minutes}m {seconds}s"
        else:
            return f"{seconds}s"
