from time import sleep, perf_counter
from lazyviews import LazyCollection, concatenate, flatten, owned, share, slice, transform, zip
from lazyviews.utils import measure_evaluation

def expensive_transform(x):
    # Simulate a costly step so laziness is visible
    print(f"  computing f({x}) ...")
    sleep(0.05)
    return x * x

print("\n--- Demo: laziness (no work until iterated) ---")
data = list(range(1, 10_000))
pipeline = (
    LazyCollection(data)            # borrowed: the view reads `data` in place
    .filter(lambda v: v % 2 == 0)
    .map(expensive_transform)
    .take(5)
)

print("Constructed pipeline. No output yet (nothing computed).")
print("\nIterating (should compute only what's needed for 5 items):")
t0 = perf_counter()
out = list(pipeline)
t1 = perf_counter()
print(f"Result: {out}")
print(f"Time: {t1 - t0:.2f}s\n")

print("--- Demo: borrowed sources reflect later changes ---")
numbers = [1, 2, 3, 4, 5]
doubled = transform(numbers, lambda i: 2 * i)
numbers[:] = [10, 20, 30]
print(f"After replacing the contents: {list(doubled)}\n")

print("--- Demo: owned and shared sources ---")
owned_view = slice(owned([1, 2, 3, 4, 5, 6]), 1, 4)
print(f"Owned slice [1, 4): {list(owned_view)}")
handle = share([[1, 2], [], [3]])
flat = flatten(handle)
print(f"Shared flatten: {list(flat)} (handle users: {handle.use_count})")
handle.reset([[7], [8, 9]])
print(f"After reset: {list(flat)}\n")

print("--- Demo: concatenate and zip ---")
words = ["a", "bb", "looong"]
print(f"Concatenated: {list(concatenate(words, ['tail']))}")
print(f"Zipped: {list(zip(range(1, 100), words))}\n")

print("--- Demo: measured evaluation ---")
report = measure_evaluation("squares_of_odds", LazyCollection(range(1, 2000)).filter(lambda v: v % 2).map(lambda v: v * v))
print(f"{report.operation}: {report.result_size} items in {report.execution_time_ms:.2f}ms")
