from litestar.plugins.structlog import StructlogPlugin
from litestar_granian import GranianPlugin

from chronoelite import config

structlog = StructlogPlugin(config=config.log)
sqlspec = config.sqlspec
granian = GranianPlugin()
