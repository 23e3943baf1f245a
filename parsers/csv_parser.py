"""Parser for course CSV files (time, power, text)."""

import logging
import math
from pathlib import Path
from typing import List, Optional, Tuple, Union

import pandas as pd

from config.settings import SUPPORTED_FORMATS, TIME_MODES, POWER_UNITS
from models.exceptions import CsvFormatError, InvalidParameterError
from models.workout import Sample, SampleTable, Timeline
from utils.time_parsing import parse_time_string

logger = logging.getLogger(__name__)


class CsvParser:
    """Parser for course CSV files.

    The file needs a header with a ``time`` column and optional ``power``
    and ``text`` columns. Rows carrying neither power nor text act as
    hold markers: they repeat the power in effect and stretch the course
    to their time.
    """

    def __init__(self, ftp: Optional[float] = None, time_mode: str = "time",
                 power_unit: str = "watts"):
        """Initialize CSV parser.

        Args:
            ftp: Functional Threshold Power in watts, required for watt values
            time_mode: 'time' for offsets from start, 'duration' for per-row durations
            power_unit: 'watts' or 'fraction' (of FTP)
        """
        if time_mode not in TIME_MODES:
            raise InvalidParameterError(
                f"time mode must be one of {', '.join(TIME_MODES)}, got {time_mode!r}"
            )
        if power_unit not in POWER_UNITS:
            raise InvalidParameterError(
                f"power unit must be one of {', '.join(POWER_UNITS)}, got {power_unit!r}"
            )
        if power_unit == "watts" and (ftp is None or not ftp > 0):
            raise InvalidParameterError(f"ftp must be positive, got {ftp!r}")

        self.ftp = ftp
        self.time_mode = time_mode
        self.power_unit = power_unit

    def parse_file(self, file_path: Union[str, Path]) -> SampleTable:
        """Parse a course file.

        Args:
            file_path: Path to the CSV file

        Returns:
            SampleTable in file order

        Raises:
            FileNotFoundError: If the file does not exist
            CsvFormatError: If the file or one of its rows is malformed
        """
        file_path = Path(file_path)
        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        file_extension = file_path.suffix.lower()
        if file_extension not in SUPPORTED_FORMATS:
            raise CsvFormatError(f"Unsupported file format: {file_extension}")

        with file_path.open('r', encoding='utf-8', newline='') as handle:
            table = self.parse(handle)

        logger.info(f"Read {len(table)} samples from {file_path}")
        return SampleTable(samples=table.samples, source=file_path)

    def parse(self, source) -> SampleTable:
        """Parse CSV content from a path or file-like object."""
        df = self._read_dataframe(source)

        samples: List[Sample] = []
        elapsed = 0.0

        for line, row in enumerate(df.itertuples(index=False), start=1):
            time = self._parse_time(row.time, line)
            power = self._parse_power(row.power, line)
            text = row.text.strip() or None

            if self.time_mode == "duration":
                time, elapsed = elapsed, elapsed + time

            samples.append(Sample(time=time, power=power, text=text))

        if self.time_mode == "duration" and samples and elapsed > samples[-1].time:
            samples.append(Sample(time=elapsed))

        return SampleTable(samples=self._resolve_holds(samples))

    def _resolve_holds(self, samples: List[Sample]) -> Tuple[Sample, ...]:
        """Give hold markers the power in effect at their time.

        Powers are looked up over the rows sorted by time, so a hold keeps
        the step function unchanged wherever it sits in the file. A hold at
        a time that already carries a power is dropped.
        """
        if all(s.has_power or s.has_text for s in samples):
            return tuple(samples)

        powered = sorted((s for s in samples if s.has_power), key=lambda s: s.time)
        lookup = Timeline(samples=tuple(powered))
        power_times = {s.time for s in powered}

        resolved = []
        for sample in samples:
            if sample.has_power or sample.has_text:
                resolved.append(sample)
            elif sample.time in power_times:
                logger.debug(f"Dropping hold at {sample.time:g}s, a power is already set there")
            elif not powered or sample.time < powered[0].time:
                # No power in effect yet; the Normalizer reports the bare row
                resolved.append(sample)
            else:
                power = lookup.power_at(sample.time)
                logger.debug(f"Hold at {sample.time:g}s keeps power {power:g}")
                power_times.add(sample.time)
                resolved.append(Sample(time=sample.time, power=power))
        return tuple(resolved)

    def _read_dataframe(self, source) -> pd.DataFrame:
        try:
            df = pd.read_csv(source, dtype=str, keep_default_na=False, skipinitialspace=True)
        except pd.errors.EmptyDataError:
            raise CsvFormatError("Course file is empty")
        except pd.errors.ParserError as e:
            raise CsvFormatError(f"Malformed CSV: {e}")

        df = df.fillna('')
        df.columns = [str(column).strip().lower() for column in df.columns]
        if 'time' not in df.columns:
            raise CsvFormatError("CSV must contain headers: time[,power,text]")

        for column in ('power', 'text'):
            if column not in df.columns:
                df[column] = ''

        return df[['time', 'power', 'text']]

    def _parse_time(self, raw: str, line: int) -> float:
        try:
            return parse_time_string(raw)
        except ValueError as e:
            raise CsvFormatError(f"Error in line {line}: {e}") from e

    def _parse_power(self, raw: str, line: int) -> Optional[float]:
        raw = raw.strip()
        if not raw:
            return None

        try:
            value = float(raw)
        except ValueError as e:
            raise CsvFormatError(f"Error in line {line}: invalid power {raw!r}") from e

        if not math.isfinite(value) or value < 0:
            raise CsvFormatError(f"Error in line {line}: power must be a non-negative number")

        if self.power_unit == "watts":
            return value / self.ftp
        return value
