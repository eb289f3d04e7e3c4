from django.conf import settings
from django.db import models
from django.utils import timezone
import uuid


class Order(models.Model):
    """
    A recorded purchase of one or more snack requests.

    Orders are append-only: once written they are never updated.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        related_name='orders_created'
    )
    created_at = models.DateTimeField(default=timezone.now, editable=False)

    # Sum of the items' net scores at purchase time
    total_net_score = models.IntegerField(default=0)

    class Meta:
        db_table = 'orders'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['created_at'], name='orders_created_idx'),
        ]

    def __str__(self):
        return f"Order {self.id} ({self.created_at:%Y-%m-%d})"


class OrderItem(models.Model):
    """Snapshot of a snack request taken when it was purchased."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    order = models.ForeignKey(
        Order,
        on_delete=models.CASCADE,
        related_name='items'
    )

    # Not a foreign key: the source request is deleted by the purchase
    request_id = models.UUIDField()
    name = models.CharField(max_length=200)
    image_url = models.URLField(max_length=500, blank=True)
    upvotes = models.PositiveIntegerField(default=0)
    downvotes = models.PositiveIntegerField(default=0)
    effective_order_month = models.DateField()

    class Meta:
        db_table = 'order_items'
        ordering = ['order', '-upvotes', 'name']

    def __str__(self):
        return f"{self.name} in {self.order_id}"

    @property
    def net_score(self):
        return self.upvotes - self.downvotes

    @property
    def display_image_url(self):
        return self.image_url or settings.SNACK_PLACEHOLDER_IMAGE_URL
