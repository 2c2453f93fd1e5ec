from onestroke.services.level_catalog import LevelCatalog, default_catalog
from onestroke.services.scheduler import Scheduler, ManualScheduler, AsyncioScheduler
from onestroke.services.trace_engine import TraceEngine
from onestroke.services.hit_testing import Viewport, nearest_node
