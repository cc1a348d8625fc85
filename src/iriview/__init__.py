__version__ = "0.1"

import logging

from .buffer import IriBuf
from .components import Authority, Component, Fragment, Query, Scheme, Segment
from .errors import DecodeError, InvalidAuthorityError, InvalidCodepointError, InvalidComponentError, InvalidFragmentError, InvalidIriError, InvalidLeadByteError, InvalidPathError, InvalidPercentEncodingError, InvalidQueryError, InvalidReferenceError, InvalidSchemeError, InvalidSegmentError, IriError, TruncatedSequenceError
from .path import Path, PathBuf
from .pct import PctStr
from .reference import Iri, IriRef, parse_iri, parse_iri_reference
from .resolve import join, merge, remove_dot_segments, resolve

logging.getLogger(__name__).addHandler(logging.NullHandler())
