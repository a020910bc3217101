"""Domain modules package."""

from app.modules.community import models as community_models  # noqa: F401
from app.modules.experts import models as experts_models  # noqa: F401
from app.modules.identity import models as identity_models  # noqa: F401
from app.modules.messaging import models as messaging_models  # noqa: F401
from app.modules.sessions import models as sessions_models  # noqa: F401
