"""
Command implementations

The get command validates its options, reads the matching records from the
edge node's metadata store, filters them by label and renders the result.
"""

import io
from dataclasses import dataclass
from typing import Callable, Optional

import structlog

from ..collectors import query_resources
from ..logging_config import PerformanceLogger
from ..models import GetOptions
from ..renderers import render
from ..selector import filter_selector
from ..store.base import MetaStore
from ..store.sqlite import SQLiteMetaStore
from ..validation import validate_get_options

logger = structlog.get_logger(__name__)


@dataclass
class CommandResult:
    """Result of command execution"""
    output: str
    exit_code: int = 0
    resource_count: int = 0
    duration: float = 0.0


class GetCommand:
    """Implementation of the get command

    Nothing is written until the whole result has been rendered, so a failure
    halfway leaves stdout empty.
    """

    def __init__(
        self,
        open_store: Callable[[str], MetaStore] = SQLiteMetaStore.open,
        width: Optional[int] = None,
    ):
        self.open_store = open_store
        self.width = width

    def execute(self, options: GetOptions) -> CommandResult:
        """Run one get invocation

        Raises:
            EdgeSnapshotError: On any validation, store or decode failure
        """
        with PerformanceLogger("get") as perf:
            store = validate_get_options(options, self.open_store)
            with store:
                records = query_resources(
                    store,
                    options.resource_type,
                    options.names,
                    options.namespace,
                    options.all_namespaces,
                )

            if options.selector:
                records = filter_selector(records, options.selector)

            buf = io.StringIO()
            render(
                records,
                options.format,
                buf,
                namespace=options.namespace,
                all_namespaces=options.all_namespaces,
                width=self.width,
            )

        return CommandResult(
            output=buf.getvalue(),
            resource_count=len(records),
            duration=perf.duration,
        )
