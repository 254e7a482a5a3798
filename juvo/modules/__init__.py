"""Domain modules package."""

from juvo.modules.audit import models as audit_models  # noqa: F401
from juvo.modules.booking import models as booking_models  # noqa: F401
from juvo.modules.catalog import models as catalog_models  # noqa: F401
from juvo.modules.identity import models as identity_models  # noqa: F401
from juvo.modules.scheduling import models as scheduling_models  # noqa: F401
from juvo.modules.settlement import models as settlement_models  # noqa: F401
