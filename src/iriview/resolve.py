"""iriview.resolve
Reference resolution, RFC 3986 section 5.2.
"""

import logging

from .buffer import IriBuf
from .path import Path, PathBuf
from .reference import Iri, IriRef

logger = logging.getLogger(__name__)


def remove_dot_segments(path: Path) -> PathBuf:
    """Implementation of the "remove_dot_segments" routine from RFC 3986 section 5.2.4.
    A ".." at the root of an absolute path is dropped; at the start of a relative one it is kept.
    """
    result: PathBuf = PathBuf(absolute=path.is_absolute())
    result.symbolic_append(path.segments())
    return result


def merge(base_path: Path, base_has_authority: bool, ref_path: Path) -> PathBuf:
    """Implementation of the "merge" routine from RFC 3986 section 5.2.3, with dot segments removed.
    Everything of the base path up to and including its last "/" is kept, then the reference path follows.
    """
    if base_has_authority and base_path.is_empty():
        result: PathBuf = PathBuf(absolute=True)
    else:
        result = PathBuf(absolute=base_path.is_absolute())
        for segment in base_path.segments():
            # A closed segment is the last one, which the reference replaces.
            if segment.is_open():
                result.symbolic_push(segment)
    result.symbolic_append(ref_path.segments())
    return result


def resolve(r: IriRef, base: Iri, strict: bool = True) -> Iri:
    """Implementation of the "Transform References" algorithm from RFC 3986 section 5.2.2.
    With strict=False, a scheme in the reference that equals the base scheme is ignored (the
    backwards-compatible behaviour the RFC allows).
    """
    target: IriBuf

    # Kept in the shape of the RFC pseudocode so it is easy to check against it.
    r_scheme = r.scheme
    if not strict and r_scheme is not None and r_scheme == base.scheme:
        r_scheme = None

    if r_scheme is not None:
        logger.debug("resolving %s: reference has a scheme", r)
        target = IriBuf.from_scheme(r_scheme)
        target.set_authority(r.authority)
        target.set_path(remove_dot_segments(r.path))
        target.set_query(r.query)
    else:
        target = IriBuf.from_scheme(base.scheme)
        if r.authority is not None:
            logger.debug("resolving %s: reference has an authority", r)
            target.set_authority(r.authority)
            target.set_path(remove_dot_segments(r.path))
            target.set_query(r.query)
        else:
            target.set_authority(base.authority)
            if r.path.is_empty():
                logger.debug("resolving %s: empty path, keeping the base path", r)
                target.set_path(base.path)
                target.set_query(r.query if r.query is not None else base.query)
            else:
                if r.path.is_absolute():
                    logger.debug("resolving %s: absolute path", r)
                    target.set_path(remove_dot_segments(r.path))
                else:
                    logger.debug("resolving %s: merging with base path %s", r, base.path)
                    target.set_path(merge(base.path, base.authority is not None, r.path))
                target.set_query(r.query)
    target.set_fragment(r.fragment)

    return target.build()


def join(base: str | bytes, reference: str | bytes, strict: bool = True) -> str:
    """Resolve reference against base and return the resulting IRI as a string."""
    return str(IriRef(reference).resolve(Iri(base), strict=strict))
