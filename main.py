# main.py
import random
import time
import traceback

# Import project modules
import constants as const
from history import MazeHistory, generate_snapshot, resolve_grid_style, snapshot_from_payload


def run_generation(seed=None):
    start_time = time.time()

    print("\n--- Configuration ---")
    shape = const.DEFAULT_SHAPE
    style = resolve_grid_style(shape, const.DEFAULT_STYLE)
    rows = const.DEFAULT_ROWS
    cols = const.DEFAULT_COLS
    cell_size = const.DEFAULT_CELL_SIZE
    rng = random.Random(seed) if seed is not None else None
    print(f"  Shape: {shape}, Style: {style}")
    print(f"  Rows/Cols: {rows}/{cols}, Cell Size: {cell_size}, Seed: {seed}")

    history = MazeHistory()
    snapshot = None
    try:
        snapshot = generate_snapshot(style, shape, rows, cols, cell_size, rng)
        history.push(snapshot)
    except Exception as e:
        print(f"ERROR during maze generation: {e}")
        traceback.print_exc()

    if snapshot is not None:
        print("\n--- Summary ---")
        print(f"  Grid: {snapshot.grid}")
        print(f"  Active cells: {len(snapshot.grid.active_cells())}")
        print(f"  Carve steps: {len(snapshot.carve_steps)}")
        print(f"  Entry/Exit: {snapshot.start_id}/{snapshot.end_id}")
        print(f"  Solution length: {len(snapshot.solution)} cells")

        # Round trip through the serialized form, as a history reload would
        restored = snapshot_from_payload(history.payloads()[-1])
        print(f"  Restored solution length: {len(restored.solution)} cells")

    end_time = time.time()
    print(f"\n--- Total Execution Time: {end_time - start_time:.2f} seconds ---")
    return snapshot


if __name__ == "__main__":
    run_generation()
