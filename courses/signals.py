"""
Signals for the courses app to clean up review videos stored on Bunny CDN.
"""
from django.db import transaction
from django.db.models.signals import post_delete
from django.dispatch import receiver
import logging
from bunny_cdn import BunnyCDNError, BunnyCDNService
from .models import ProjectSubmission

logger = logging.getLogger(__name__)


@receiver(post_delete, sender=ProjectSubmission)
def delete_review_video(sender, instance, **kwargs):
    """
    Delete the review video from Bunny CDN once the submission's deletion
    is committed. A rolled back delete leaves the file in place.
    """
    if not instance.review_video_url:
        return

    service = BunnyCDNService()
    file_name = service.file_name_from_url(instance.review_video_url)
    if not file_name or not service.is_available():
        return

    submission_id = instance.id

    def remove_file():
        try:
            service.delete(file_name)
        except BunnyCDNError as e:
            logger.error(f"Error deleting review video {file_name} for submission {submission_id}: {e}")

    transaction.on_commit(remove_file)
