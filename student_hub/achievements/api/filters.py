import django_filters

from student_hub.achievements.models import SubmissionStatus


class SubmissionFilter(django_filters.FilterSet):
    """Model-agnostic: declared filters only, so it fits every variant."""

    status = django_filters.ChoiceFilter(choices=SubmissionStatus.choices)
    created_after = django_filters.IsoDateTimeFilter(
        field_name="created_at", lookup_expr="gte"
    )
    created_before = django_filters.IsoDateTimeFilter(
        field_name="created_at", lookup_expr="lt"
    )
