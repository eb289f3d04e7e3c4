from django.conf import settings
from django.db import models
from django.utils import timezone
import uuid

from .order_cycle import format_month_label, month_date_range, month_range
from .voting import Tally, net_score


class MonthField(models.TextChoices):
    """Which timestamp a month filter is applied to."""
    EFFECTIVE = 'effective', 'Effective order month'
    CREATED = 'created', 'Submission month'


class SnackRequestQuerySet(models.QuerySet):

    def in_month(self, year, month, field=MonthField.EFFECTIVE):
        """Requests whose ``field`` falls inside the given month."""
        if field == MonthField.CREATED:
            return self.filter(created_at__range=month_range(year, month))
        return self.filter(effective_order_month__range=month_date_range(year, month))

    def newest_first(self, field=None):
        """Newest first by ``field``, falling back to submission time."""
        if field == MonthField.EFFECTIVE:
            return self.order_by('-effective_order_month', '-created_at')
        return self.order_by('-created_at')


class SnackRequest(models.Model):
    """A snack proposal waiting for votes and, eventually, a purchase."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    name = models.CharField(max_length=200)
    image_url = models.URLField(max_length=500, blank=True)

    # Tallies only ever increase
    upvotes = models.PositiveIntegerField(default=0)
    downvotes = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField(default=timezone.now, editable=False)
    # Always the 1st of a month, derived once from created_at
    effective_order_month = models.DateField(editable=False)

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='snack_requests'
    )

    objects = SnackRequestQuerySet.as_manager()

    class Meta:
        db_table = 'snack_requests'
        indexes = [
            models.Index(fields=['created_at'], name='snack_req_created_idx'),
            models.Index(
                fields=['effective_order_month', 'created_at'],
                name='snack_req_month_idx'
            ),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.name} ({self.requested_for})"

    @property
    def net_score(self):
        return net_score(self.upvotes, self.downvotes)

    @property
    def tally(self):
        return Tally(upvotes=self.upvotes, downvotes=self.downvotes)

    @property
    def requested_for(self):
        """Label of the order month, e.g. 'November 2026'."""
        return format_month_label(self.effective_order_month)

    @property
    def display_image_url(self):
        return self.image_url or settings.SNACK_PLACEHOLDER_IMAGE_URL
