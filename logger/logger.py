import json
import os
from datetime import datetime, timezone

class JSONLogger:
    """
    Run records as JSON lines, one file per UTC day.

    Every run goes to `<prefix><date>.jsonl`; it is also filed under
    `halted_<date>.jsonl` or `unfinished_<date>.jsonl` depending on whether the
    machine stopped or ran out of its step budget.
    """

    def __init__(self, output_directory="logs/", log_file_prefix="tm_runs_"):
        self.output_directory = output_directory
        self.log_file_prefix = log_file_prefix
        os.makedirs(self.output_directory, exist_ok=True)

    def path_for(self, name, day=None):
        day = day or datetime.now(timezone.utc).strftime("%Y-%m-%d")
        return os.path.join(self.output_directory, f"{name}{day}.jsonl")

    def log_run(self, entry: dict):
        outcome = "halted_" if entry["halted"] else "unfinished_"
        line = json.dumps(entry) + "\n"
        for name in (self.log_file_prefix, outcome):
            with open(self.path_for(name), "a", encoding="utf-8") as f:
                f.write(line)

    def read_runs(self, name=None, day=None):
        """Records from one day's log, oldest first; [] when nothing was logged."""
        path = self.path_for(name or self.log_file_prefix, day)
        if not os.path.exists(path):
            return []
        with open(path, "r", encoding="utf-8") as f:
            return [json.loads(line) for line in f if line.strip()]
