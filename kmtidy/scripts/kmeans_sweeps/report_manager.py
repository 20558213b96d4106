import logging
import os
from typing import Any, Dict, Set

import pandas as pd

from kmtidy.shared.utils.numpy_helpers import convert_to_primitives_nested

from .clustering_executor import SweepTables

logger = logging.getLogger(__name__)


class ReportManager:
    """Manages the CSV reports of a k sweep"""

    CLUSTERS_FILE = "clusters.csv"
    ASSIGNMENTS_FILE = "assignments.csv"
    SUMMARIES_FILE = "summaries.csv"

    def __init__(self, output_dir: str):
        """
        Initialize report manager.

        Args:
            output_dir: Directory holding clusters.csv, assignments.csv and summaries.csv
        """
        self.output_dir = output_dir
        self._ensure_output_directory()

    @property
    def clusters_path(self) -> str:
        return os.path.join(self.output_dir, self.CLUSTERS_FILE)

    @property
    def assignments_path(self) -> str:
        return os.path.join(self.output_dir, self.ASSIGNMENTS_FILE)

    @property
    def summaries_path(self) -> str:
        return os.path.join(self.output_dir, self.SUMMARIES_FILE)

    def _ensure_output_directory(self) -> None:
        """Ensure the output directory exists"""
        if not os.path.exists(self.output_dir):
            os.makedirs(self.output_dir)

    def get_completed_ks(self) -> Set[int]:
        """
        Get the values of k that already have a summary row.

        Returns:
            Set of completed values of k
        """
        if not os.path.exists(self.summaries_path):
            return set()

        try:
            df = pd.read_csv(self.summaries_path)
        except pd.errors.EmptyDataError:
            return set()

        if "k" not in df.columns:
            return set()
        return set(df["k"].dropna().astype(int))

    def append_tables(self, tables: SweepTables) -> None:
        """
        Append the stacked tidy tables of a sweep to the reports.

        Args:
            tables: Tables produced by stack_tidy_tables
        """
        for path, table in (
            (self.clusters_path, tables.clusters),
            (self.assignments_path, tables.assignments),
            (self.summaries_path, tables.summaries),
        ):
            if table.empty:
                continue

            # Write header only if file is new
            file_exists = os.path.exists(path) and os.path.getsize(path) > 0
            table.to_csv(path, mode="a", header=not file_exists, index=False)
            logger.debug(f"Appended {len(table)} rows to {path}")

    def load_tables(self) -> SweepTables:
        """Read all three reports back, ordered by k"""
        return SweepTables(
            clusters=self._read_sorted(self.clusters_path),
            assignments=self._read_sorted(self.assignments_path),
            summaries=self._read_sorted(self.summaries_path),
        )

    def _read_sorted(self, path: str) -> pd.DataFrame:
        if not os.path.exists(path):
            return pd.DataFrame()
        df = pd.read_csv(path)
        if "k" in df.columns:
            df = df.sort_values("k", kind="stable").reset_index(drop=True)
        return df

    def get_report_summary(self) -> Dict[str, Any]:
        """
        Get summary statistics from the current reports.

        Returns:
            Dictionary with the completed values of k, row counts and the
            elbow series mapping k to total within-cluster sum of squares
        """
        tables = self.load_tables()
        summaries = tables.summaries

        if summaries.empty:
            return {
                "completed_ks": [],
                "n_cluster_rows": len(tables.clusters),
                "n_assignment_rows": len(tables.assignments),
                "elbow": {},
            }

        elbow = dict(zip(summaries["k"].to_numpy(), summaries["tot_withinss"].to_numpy()))
        return convert_to_primitives_nested(
            {
                "completed_ks": sorted(elbow),
                "n_cluster_rows": len(tables.clusters),
                "n_assignment_rows": len(tables.assignments),
                "elbow": elbow,
            }
        )
