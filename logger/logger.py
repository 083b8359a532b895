import json
import os
from datetime import datetime, timezone

class JSONLogger:
    def __init__(self, output_directory="logs/", log_file_prefix="utm_"):
        self.output_directory = output_directory
        self.log_file_prefix = log_file_prefix
        os.makedirs(self.output_directory, exist_ok=True)
        self.today = datetime.now(timezone.utc).strftime("%Y-%m-%d")
        self.current_log = self._get_log_filename()

    def _get_log_filename(self):
        filename = f"{self.log_file_prefix}{self.today}.jsonl"  # JSON lines format
        return os.path.join(self.output_directory, filename)

    def _log_to_file(self, filename, entries):
        path = os.path.join(self.output_directory, filename)
        with open(path, "a", encoding="utf-8") as f:
            for entry in entries:
                f.write(json.dumps(entry) + "\n")

    @staticmethod
    def _timestamped(entry):
        return {"timestamp": datetime.now(timezone.utc).isoformat(), **entry}

    def log(self, entry: dict):
        """Log a single entry to the main run log."""
        with open(self.current_log, "a", encoding="utf-8") as f:
            f.write(json.dumps(self._timestamped(entry)) + "\n")

    def log_batch(self, entries: list):
        """Log a batch of entries to the main run log."""
        with open(self.current_log, "a", encoding="utf-8") as f:
            for entry in entries:
                f.write(json.dumps(self._timestamped(entry)) + "\n")

    def log_steps(self, run_id, records):
        """Log StepRecords of one run, tagged with its id."""
        self.log_batch([{"run_id": run_id, "event": "step", **record.to_dict()} for record in records])

    def log_halted(self, entries: list):
        """Log runs that reached their halting state."""
        filename = f"halted_{self.today}.jsonl"
        self._log_to_file(filename, [self._timestamped(e) for e in entries])

    def log_failed(self, entries: list):
        """Log runs that aborted with an error."""
        filename = f"failed_{self.today}.jsonl"
        self._log_to_file(filename, [self._timestamped(e) for e in entries])
