from jump_common.constants import *
from jump_common.core_utils import LOG, LOG_DEBUG, LOG_EXCEPTION, set_debug_logging
from jump_common.frecency import Frecency, FrecencyDatabaseError
from jump_common.frecent_paths import FrecencySaveError, PathFrecency
from jump_common.matchers import CaseInsensitive, ExactMatch, FuzzyMatch, PathComponent, SubstringMatch, default_matchers
