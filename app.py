import sys

from loguru import logger

from kinpath.api import create_app
from kinpath.config import settings
from kinpath.tree_stores.local import LocalTreeStore

logger.configure(handlers=[{"sink": sys.stderr, "level": settings.log_level}])

logger.info(f"Loading family trees from {settings.local_tree_store_path}")
tree_store = LocalTreeStore(settings.local_tree_store_path)
app = create_app(tree_store=tree_store)
