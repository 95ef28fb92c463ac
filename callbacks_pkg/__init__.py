from .records import *  # noqa
from .record_form import *  # noqa
