"""
Terminal table renderer using rich

Prints one borderless table per kind, in the column layout of ``kubectl get``,
followed by a blank separator line.
"""

from datetime import datetime, timezone
from typing import List, Optional, TextIO

from rich.console import Console
from rich.table import Table

from ..models import ResourceGroups, ResourceKind
from .columns import TABLE_SPECS

DEFAULT_WIDTH = 200


class TableRenderer:
    """Renders minimal resource objects as plain text tables

    Tables are printed without borders and wrap nothing: columns are as wide as
    their widest cell, separated by three spaces.
    """

    def __init__(
        self,
        out: TextIO,
        with_namespace: bool = False,
        width: Optional[int] = None,
        now: Optional[datetime] = None,
    ):
        self.console = Console(
            file=out,
            width=width or DEFAULT_WIDTH,
            color_system=None,
            highlight=False,
            markup=False,
            emoji=False,
            legacy_windows=False,
        )
        self.with_namespace = with_namespace
        self.now = now or datetime.now(timezone.utc)

    def build_table(self, kind: ResourceKind, items: List) -> Table:
        """Build the table for one kind from its minimal objects"""
        spec = TABLE_SPECS[kind]
        add_namespace = self.with_namespace and spec.namespaced

        table = Table(
            box=None,
            show_header=True,
            show_edge=False,
            pad_edge=False,
            padding=(0, 3, 0, 0),
        )
        columns = (["NAMESPACE"] if add_namespace else []) + spec.columns
        for column in columns:
            table.add_column(column, no_wrap=True, overflow="ignore")

        for item in items:
            row = spec.row(item, self.now)
            if add_namespace:
                row = [item.metadata.namespace] + row
            table.add_row(*row)
        return table

    def render(self, groups: ResourceGroups) -> None:
        """Print a table for every non-empty kind in render order"""
        for kind, items in groups.in_render_order():
            self.console.print(self.build_table(kind, items))
            self.console.print()
