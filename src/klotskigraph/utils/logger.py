import os
import json
import pandas as pd
from datetime import datetime
from typing import Any, Dict


class RunLogger:
    def __init__(self, log_dir: str, experiment_name: str):
        """
        Initializes the logger for one enumeration run.

        Args:
            log_dir (str): The base directory for logs.
            experiment_name (str): A name for the run; a timestamp is appended.
        """
        self.timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        self.experiment_name = f"{experiment_name}_{self.timestamp}"
        self.run_dir = os.path.join(log_dir, self.experiment_name)
        self.events = []

        os.makedirs(self.run_dir, exist_ok=True)

    def path(self, filename: str) -> str:
        return os.path.join(self.run_dir, filename)

    def log_event(self, event_type: str, data: Dict[str, Any]):
        """
        Records one event of the run.

        Args:
            event_type (str): "setup", "progress", "result" or "error".
            data (Dict[str, Any]): Event payload; must be JSON serialisable.
        """
        self.events.append({
            "event": event_type,
            "timestamp": datetime.now().isoformat(),
            **data,
        })

    def save_logs(self):
        """Saves all collected events to a JSON file plus a text summary."""
        log_file = self.path("run_log.json")
        with open(log_file, "w") as f:
            json.dump(self.events, f, indent=2, default=str)

        summary_file = self.path("summary.txt")
        self._create_summary_file(summary_file)
        return log_file, summary_file

    def _create_summary_file(self, summary_file: str):
        """Create a human-readable summary file."""
        results = [e for e in self.events if e["event"] == "result"]
        errors = [e for e in self.events if e["event"] == "error"]
        progress = [e for e in self.events if e["event"] == "progress"]

        with open(summary_file, "w") as f:
            f.write(f"Run Summary: {self.experiment_name}\n")
            f.write("=" * 60 + "\n")
            f.write(f"Progress Reports: {len(progress)}\n")
            f.write(f"Errors Occurred: {len(errors)}\n")
            for result in results:
                f.write("\nResult:\n")
                f.write("-" * 30 + "\n")
                for key, value in result.items():
                    if key in ("event", "timestamp"):
                        continue
                    f.write(f"  {key}: {value}\n")
            for error in errors:
                f.write(f"\nERROR - {error.get('error', 'Unknown')}\n")

    def save_results_to_csv(self, results: Dict[str, Any], csv_path: str):
        """
        Appends one results row to a CSV table, creating it if needed.

        Args:
            results (Dict[str, Any]): Flat dictionary of run results.
            csv_path (str): The path to the results table.
        """
        results_df = pd.DataFrame([results])

        if os.path.exists(csv_path):
            existing_df = pd.read_csv(csv_path)
            updated_df = pd.concat([existing_df, results_df], ignore_index=True)
        else:
            parent = os.path.dirname(csv_path)
            if parent:
                os.makedirs(parent, exist_ok=True)
            updated_df = results_df

        updated_df.to_csv(csv_path, index=False)
        return csv_path
