import django_filters

from sportmate.locations.models import Location


class LocationFilter(django_filters.FilterSet):
    status = django_filters.ChoiceFilter(choices=Location.Status.choices)
    location_type = django_filters.ChoiceFilter(choices=Location.LocationType.choices)
    submitted_by = django_filters.NumberFilter(field_name="submitted_by__id")

    class Meta:
        model = Location
        fields = ["status", "location_type", "submitted_by"]
