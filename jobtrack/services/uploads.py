import os, tempfile, logging
from contextlib import contextmanager

logger = logging.getLogger(__name__)

PDF_MIMETYPE = "application/pdf"

def is_pdf_upload(f) -> bool:
    if not f or not f.filename:
        return False
    return f.mimetype == PDF_MIMETYPE

@contextmanager
def temporary_upload(f, suffix: str = ".pdf"):
    """
    Save an uploaded file to a temp path for the duration of the block.
    The file is removed on every exit path, including exceptions.
    """
    tmp = tempfile.NamedTemporaryFile(delete=False, suffix=suffix)
    try:
        f.save(tmp)
        tmp.close()
        yield tmp.name
    finally:
        tmp.close()
        try:
            os.unlink(tmp.name)
        except FileNotFoundError:
            pass
        except OSError:
            logger.warning("could not remove temp upload %s", tmp.name, exc_info=True)
