"""Onboarding API serializers."""

from rest_framework import serializers


class OnboardingStateSerializer(serializers.Serializer):
    """Serializes a GuidedOnboardingState snapshot for the dashboard stepper."""

    phase = serializers.SerializerMethodField()
    is_guided_active = serializers.BooleanField()
    dismissed = serializers.BooleanField()
    should_prompt = serializers.BooleanField()
    current_section = serializers.CharField(allow_null=True)
    step_number = serializers.IntegerField(allow_null=True)
    total_steps = serializers.IntegerField()
    incomplete_sections = serializers.ListField(child=serializers.CharField())
    first_incomplete_section = serializers.CharField(allow_null=True)
    previous_section = serializers.CharField(allow_null=True)
    next_section = serializers.CharField(allow_null=True)
    is_last_step = serializers.BooleanField()

    def get_phase(self, obj):
        return obj.phase.value
