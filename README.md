# radartrack

Building blocks for a radar-station vision pipeline: projecting lidar point
clouds into a camera depth map, small rectangle and colour helpers, a
thread-safe bounded queue, and a DeepSORT-style multi-object tracker built
from a Kalman filter, a nearest-neighbour appearance metric and the Hungarian
algorithm.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Contents

| Module | What it provides |
| --- | --- |
| `radartrack.models` | `Rect` (with `intersect`), `DetectBox`, `ArmorBoundingBox`, `BoxAndRect`, `MapLocation2D`, `MapLocation3D`, `BOData`, `JudgeMessage` |
| `radartrack.geometry` | `f_min`, `f_max`, `make_rect_safe`, `rect_center_scale`, `remap_rect`, `sum_conf_average`, `hsv_to_bgr` |
| `radartrack.shared_queue` | `SharedQueue`, a blocking FIFO queue with an optional depth limit |
| `radartrack.detection` | `ClsConf`, `Detection` (with `to_xyah` and `to_tlbr`), `MatchResult` |
| `radartrack.depth` | `DepthQueue`, which turns (N, 3) point clouds into a per-pixel nearest-depth map |
| `radartrack.munkres` | `Munkres`, `replace_infinites`, `minimize_along_direction` |
| `radartrack.hungarian` | `solve`, which returns the assigned (row, column) pairs of a cost matrix |
| `radartrack.kalman` | `KalmanFilter` over (x, y, aspect ratio, height) and their velocities, `CHI2INV95` |
| `radartrack.metric` | `MetricType`, `NearestNeighborDistanceMetric` |
| `radartrack.track` | `TrackState`, `Track` |
| `radartrack.assignment` | `matching_cascade`, `min_cost_matching`, `gate_cost_matrix`, `INFTY_COST` |
| `radartrack.tracker` | `Tracker`, `iou` |
| `radartrack.deepsort` | `DeepSort`, the detection-box-to-track front end |

## Examples

A queue that keeps only the newest items:

```python
from radartrack.shared_queue import SharedQueue

queue = SharedQueue()
queue.set_depth(2)
for frame in ("a", "b", "c"):
    queue.push(frame)
assert len(queue) == 2
assert queue.front() == "b"
```

`front` and `pop` block until an item is available.

Solving an assignment problem:

```python
import numpy as np
from radartrack.hungarian import solve

pairs = solve(np.array([[4.0, 1.0], [2.0, 8.0]]))
# [[0, 1], [1, 0]]
```

Tracking detection boxes frame by frame. `DeepSort` takes a feature
extractor: a callable given the frame and that frame's `Detection` list,
returning one appearance feature row per detection.

```python
import numpy as np
from radartrack.deepsort import DeepSort
from radartrack.models import DetectBox

def extract(frame, detections):
    return np.ones((len(detections), 256))

tracker = DeepSort(extract, n_init=2)
dets = [DetectBox(x1=10, y1=20, x2=60, y2=120, confidence=0.9, class_id=3)]
for _ in range(3):
    tracked = tracker.sort(None, dets)
for box in tracked:
    print(box.track_id, box.class_id, box.x1, box.y1, box.x2, box.y2)
```

`sort` reports only tracks that are confirmed (matched `n_init` times; 20 by
default) and were updated in the current frame. A frame with no boxes
returns an empty list and leaves the tracks unchanged.

Building a depth map from a point cloud:

```python
import numpy as np
from radartrack.depth import DepthQueue

k = [[500, 0, 320], [0, 500, 240], [0, 0, 1]]
queue = DepthQueue(k, np.zeros(5), np.eye(4), image_width=640,
                   image_height=480, max_points=1000, max_queue_size=3)
depth = queue.push([[0.0, 0.0, 5.0]])
assert depth[240, 320] == 5.0
```

Each pixel keeps the nearest positive depth from the last `max_queue_size`
clouds; pixels touched by an evicted cloud are cleared. The distortion
coefficients are stored but not applied.

## What this package does not do

It contains no object detector and no appearance-feature network: boxes
come from the caller, and features from the extractor passed to
`DeepSort`. It does not read cameras, videos or point-cloud streams, does
not record video, and has no display, window or command-line program.