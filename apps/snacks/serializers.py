"""
Serializers for snacks app.

Input Serializers:
    SnackRequestCreateSerializer - Submission payload
    VoteInputSerializer - Vote direction
    MonthFilterSerializer - ``month`` / ``month_field`` query parameters
    CycleQuerySerializer - Date to preview the order cycle for

Output Serializers:
    SnackRequestSerializer - Active request with derived scores and labels
    OrderCycleSerializer - Effective order month preview
"""

from rest_framework import serializers

from apps.accounts.serializers import UserMinimalSerializer

from .exceptions import InvalidMonthError
from .filters import RequestFilter
from .models import MonthField, SnackRequest
from .voting import VoteDirection, format_net_score


# =============================================================================
# Input Serializers
# =============================================================================

class SnackRequestCreateSerializer(serializers.Serializer):
    """
    Validate a new snack request.

    Blank names pass validation here; the service decides to ignore them.
    """

    name = serializers.CharField(max_length=200, allow_blank=True, trim_whitespace=False)
    image_url = serializers.URLField(max_length=500, required=False, allow_blank=True)


class VoteInputSerializer(serializers.Serializer):
    direction = serializers.ChoiceField(choices=VoteDirection.choices)


class MonthFilterSerializer(serializers.Serializer):
    """
    Validate month filter query parameters.

    Query Parameters:
        month (str): Month in YYYY-MM format; empty means no filter
        month_field (str): 'effective' (default) or 'created'

    Note:
        ``validated_data['request_filter']`` holds the resulting
        RequestFilter, or None when no month was given.
    """

    month = serializers.CharField(required=False, allow_blank=True)
    month_field = serializers.ChoiceField(
        choices=MonthField.choices,
        required=False,
        default=MonthField.EFFECTIVE
    )

    def validate(self, attrs):
        try:
            attrs['request_filter'] = RequestFilter.from_query(
                attrs.get('month'),
                attrs.get('month_field'),
            )
        except InvalidMonthError as e:
            raise serializers.ValidationError({'month': str(e)})
        return attrs


class CycleQuerySerializer(serializers.Serializer):
    date = serializers.DateField(required=False)


# =============================================================================
# Output Serializers
# =============================================================================

class SnackRequestSerializer(serializers.ModelSerializer):
    """Active snack request."""

    owner = UserMinimalSerializer(read_only=True)
    display_image_url = serializers.CharField(read_only=True)
    net_score = serializers.IntegerField(read_only=True)
    net_score_display = serializers.SerializerMethodField()
    requested_for = serializers.CharField(read_only=True)

    class Meta:
        model = SnackRequest
        fields = [
            'id',
            'name',
            'image_url',
            'display_image_url',
            'upvotes',
            'downvotes',
            'net_score',
            'net_score_display',
            'created_at',
            'effective_order_month',
            'requested_for',
            'owner',
        ]
        read_only_fields = fields

    def get_net_score_display(self, obj) -> str:
        return format_net_score(obj.net_score)


class OrderCycleSerializer(serializers.Serializer):
    date = serializers.DateField()
    deadline = serializers.DateField()
    effective_order_month = serializers.DateField()
    requested_for = serializers.CharField()
