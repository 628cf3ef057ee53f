"""
Resume Parsing Pipeline

Turns uploaded resume documents into structured candidate data with
confidence scores and a manual review decision.
"""

from resume_pipeline.utils.constants import APP_DISPLAY_NAME, VERSION

__version__ = VERSION
__app_name__ = APP_DISPLAY_NAME
