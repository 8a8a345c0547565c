"""
Main entry point for the SwapCycles platform.
"""

import json
import threading
import time
from typing import Any, Dict, List, Optional, Tuple

from .core.enums import ReportFormat
from .core.exceptions import ConfigurationError
from .persistence import StudentRegistry, SectionRegistry
from .services import (
    ConcurrencyManager, CycleFinder, EnrollmentService, GraphBuilder, GraphReporter,
    SAMPLE_GRAPH, SAMPLE_STUDENTS
)
from .services.cycle_finder import DEFAULT_KEY_DELIMITER
from .api.rest_api import SwapCycleRestAPI

DEFAULT_CONFIG: Dict[str, Any] = {
    'graph': SAMPLE_GRAPH,
    'report_students': SAMPLE_STUDENTS,
    'cycle_key_delimiter': DEFAULT_KEY_DELIMITER,
    'rest_host': "0.0.0.0",
    'rest_port': 8000,
}


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Load a JSON configuration file, or return an empty config."""
    if not path:
        return {}
    try:
        with open(path, 'r') as f:
            config = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Cannot read configuration {path}: {e}", error_code="invalid_config")
    if not isinstance(config, dict):
        raise ConfigurationError("Configuration must be a JSON object", error_code="invalid_config")
    return config


class SwapCyclePlatform:
    """Main platform class that wires registries, services and the API."""

    def __init__(self, config: Optional[dict] = None):
        self._config = {**DEFAULT_CONFIG, **(config or {})}
        self._validate_config()
        self._rest_thread = None

        self._concurrency_manager = ConcurrencyManager()
        self._students = StudentRegistry()
        self._sections = SectionRegistry()

        self._enrollment_service = EnrollmentService(
            self._students, self._sections, self._concurrency_manager
        )
        self._cycle_finder = CycleFinder(
            self._students,
            self._sections,
            concurrency_manager=self._concurrency_manager,
            key_delimiter=self._config['cycle_key_delimiter']
        )
        self._reporter = GraphReporter(self._students, self._sections)
        self._graph_builder = GraphBuilder(self._enrollment_service)
        self._rest_app = None

    def _validate_config(self):
        delimiter = self._config['cycle_key_delimiter']
        if not isinstance(delimiter, str) or not delimiter:
            raise ConfigurationError("cycle_key_delimiter must be a non-empty string", error_code="invalid_config")

        report_students = self._config['report_students']
        if not isinstance(report_students, list) or not all(isinstance(s, str) for s in report_students):
            raise ConfigurationError("report_students must be a list of strings", error_code="invalid_config")

        rest_port = self._config['rest_port']
        if isinstance(rest_port, bool) or not isinstance(rest_port, int):
            raise ConfigurationError("rest_port must be an integer", error_code="invalid_config")

    @property
    def students(self) -> StudentRegistry:
        return self._students

    @property
    def sections(self) -> SectionRegistry:
        return self._sections

    @property
    def cycle_finder(self) -> CycleFinder:
        return self._cycle_finder

    @property
    def enrollment_service(self) -> EnrollmentService:
        return self._enrollment_service

    @property
    def reporter(self) -> GraphReporter:
        return self._reporter

    def initialize_graph(self) -> None:
        """Populate the registries from the configured graph."""
        self._graph_builder.initialize_graph(self._config['graph'])

    @property
    def rest_api(self) -> SwapCycleRestAPI:
        if self._rest_app is None:
            self._rest_app = SwapCycleRestAPI(
                self._students,
                self._sections,
                self._enrollment_service,
                self._cycle_finder,
                self._reporter
            )
        return self._rest_app

    def bind_address(self, host: Optional[str] = None, port: Optional[int] = None) -> Tuple[str, int]:
        """Resolve the REST bind address, falling back to the configuration."""
        return (
            host if host is not None else self._config['rest_host'],
            port if port is not None else self._config['rest_port'],
        )

    def start_rest_server(self, host: Optional[str] = None, port: Optional[int] = None):
        """Start the REST server in a background thread."""
        import uvicorn

        host, port = self.bind_address(host, port)
        app = self.rest_api.app

        def run_server():
            uvicorn.run(
                app,
                host=host,
                port=port,
                log_level="info"
            )

        self._rest_thread = threading.Thread(target=run_server, daemon=True)
        self._rest_thread.start()

        print(f"✓ REST server started on {host}:{port}")

    def count_report(self, students: Optional[List[str]] = None) -> List[str]:
        """Count cycles for each student and format one line per student."""
        lines = []
        if students is None:
            students = self._config['report_students']
        for student_id in students:
            count = self._cycle_finder.count_unique_cycles(student_id)
            lines.append(f"Unique Cycles for Student {student_id}: {count}")
        return lines

    def run_demo(self):
        """Print the graph followed by the cycle count of each report student."""
        print("Initial Graph State:")
        print(self._reporter.generate_report(ReportFormat.TEXT))

        for line in self.count_report():
            print(line)


def main(argv: Optional[List[str]] = None):
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="Section swap-cycle detection")
    parser.add_argument("--config", type=str, help="Configuration file path")
    parser.add_argument("--serve", action="store_true", help="Run the REST API instead of the demo")
    parser.add_argument("--host", type=str, help="REST server host")
    parser.add_argument("--port", type=int, help="REST server port")

    args = parser.parse_args(argv)

    try:
        platform = SwapCyclePlatform(load_config(args.config))
        platform.initialize_graph()
    except ConfigurationError as e:
        parser.error(e.message)

    if not args.serve:
        platform.run_demo()
        return

    platform.start_rest_server(args.host, args.port)

    try:
        print("\nPlatform is running. Press Ctrl+C to stop.")
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        print("\nShutting down...")


if __name__ == "__main__":
    main()
