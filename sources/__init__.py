# Importing the package registers the built-in people sources
from . import linkedin_people  # noqa: F401
from . import crunchbase_people  # noqa: F401
from . import company_website  # noqa: F401
from . import hunter_directory  # noqa: F401
