"""
Utility functions for measuring and exercising lazy views.

Helpers for timing the evaluation of a view, validating that a pipeline is
still lazy, and building pipelines from operation descriptions.
"""

import time
import gc
import logging
import tracemalloc
from typing import Any, Callable, Dict, List

from lazyviews.collection import LazyCollection
from lazyviews.models import EvaluationReport, PerformanceSummary
from lazyviews.terminal import collect
from lazyviews.views import View

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


# Global performance tracking
_performance_metrics = {
    "operations": [],
    "total_time_ms": 0.0,
    "total_memory_mb": 0.0,
    "operation_count": 0
}


def _record(report: EvaluationReport):
    _performance_metrics["operations"].append(report)
    _performance_metrics["total_time_ms"] += report.execution_time_ms
    _performance_metrics["total_memory_mb"] += report.memory_usage_mb
    _performance_metrics["operation_count"] += 1


def measure_evaluation(operation_name: str, view, container: Callable = list) -> EvaluationReport:
    """Force ``view`` into ``container`` while tracking time and peak memory"""

    # Start memory tracking
    tracemalloc.start()
    gc.collect()

    start_time = time.perf_counter()

    try:
        result = collect(view, container)

        execution_time_ms = (time.perf_counter() - start_time) * 1000
        current, peak = tracemalloc.get_traced_memory()

        report = EvaluationReport(
            operation=operation_name,
            execution_time_ms=execution_time_ms,
            memory_usage_mb=peak / 1024 / 1024,
            success=True,
            result_size=len(result) if hasattr(result, "__len__") else None,
            result=result,
            timestamp=time.time()
        )
        _record(report)
        logger.info(f"Evaluated {operation_name} in {execution_time_ms:.2f}ms")
        return report

    except Exception as e:
        # End timing even on error
        execution_time_ms = (time.perf_counter() - start_time) * 1000
        current, peak = tracemalloc.get_traced_memory()

        report = EvaluationReport(
            operation=operation_name,
            execution_time_ms=execution_time_ms,
            memory_usage_mb=peak / 1024 / 1024,
            success=False,
            error=str(e),
            timestamp=time.time()
        )
        _record(report)
        logger.error(f"Evaluation of {operation_name} failed after {execution_time_ms:.2f}ms: {e}")
        raise

    finally:
        tracemalloc.stop()


def get_recorded_reports() -> List[EvaluationReport]:
    """All reports recorded since the last clear"""
    return list(_performance_metrics["operations"])


def get_performance_summary() -> PerformanceSummary:
    """Get summary of all performance metrics"""
    count = _performance_metrics["operation_count"]
    if count == 0:
        return PerformanceSummary()

    return PerformanceSummary(
        total_operations=count,
        total_time_ms=_performance_metrics["total_time_ms"],
        total_memory_mb=_performance_metrics["total_memory_mb"],
        avg_time_ms=_performance_metrics["total_time_ms"] / count,
        avg_memory_mb=_performance_metrics["total_memory_mb"] / count
    )


def clear_performance_metrics():
    """Clear all performance metrics"""
    global _performance_metrics
    _performance_metrics = {
        "operations": [],
        "total_time_ms": 0.0,
        "total_memory_mb": 0.0,
        "operation_count": 0
    }


def validate_lazy_evaluation(candidate: Any) -> bool:
    """Check that ``candidate`` is an unevaluated view or lazy collection"""
    return isinstance(candidate, (View, LazyCollection))


def apply_operations(collection: LazyCollection, operations: List[Dict[str, Any]]) -> LazyCollection:
    """
    Chain described operations onto ``collection``.

    Each operation is a dict with a ``type`` key (map, filter, take,
    take_while, slice, page) and the callable or numbers it needs.
    """
    for op in operations:
        op_type = op.get("type")

        if op_type == "map":
            collection = collection.map(op["function"])

        elif op_type == "filter":
            collection = collection.filter(op["predicate"])

        elif op_type == "take":
            collection = collection.take(op.get("count", 10))

        elif op_type == "take_while":
            collection = collection.take_while(op["predicate"])

        elif op_type == "slice":
            collection = collection.slice(op.get("start", 0), op["until"])

        elif op_type == "page":
            collection = collection.page(op.get("page_number", 1), op.get("page_size", 10))

        else:
            raise ValueError(f"Unknown op: {op_type}")

    return collection


def check_composability(source_data: List[Any], operation_chains: List[List[Dict[str, Any]]]) -> Dict[str, Any]:
    """Run each operation chain over ``source_data`` and report which ones evaluate"""

    results = {
        "chains_tested": 0,
        "all_chains_composable": True,
        "errors": [],
        "chain_results": []
    }

    for i, chain in enumerate(operation_chains):
        try:
            lazy_col = apply_operations(LazyCollection(source_data), chain)
            report = measure_evaluation(f"chain_{i}", lazy_col)

            results["chain_results"].append({
                "chain_index": i,
                "success": True,
                "result_length": report.result_size,
                "operations_count": len(chain)
            })

        except Exception as e:
            results["all_chains_composable"] = False
            results["errors"].append(f"Chain {i}: {str(e)}")

            results["chain_results"].append({
                "chain_index": i,
                "success": False,
                "error": str(e),
                "operations_count": len(chain)
            })

        results["chains_tested"] += 1

    return results
