"""
Cases app serializers.
"""

from __future__ import annotations

from rest_framework import serializers

from .models import Case, CaseStatement, CaseStatus


class CaseStatementSerializer(serializers.ModelSerializer):
    class Meta:
        model = CaseStatement
        fields = ["id", "case", "statement_by", "statement_text", "statement_date", "created_at"]
        read_only_fields = fields


class CaseStatementCreateSerializer(serializers.Serializer):
    statement_text = serializers.CharField()
    statement_by = serializers.CharField(max_length=255, required=False, allow_blank=True)
    statement_date = serializers.DateTimeField(required=False, allow_null=True)


class CaseCreateSerializer(serializers.Serializer):
    fir = serializers.IntegerField()
    judge = serializers.IntegerField()
    case_type = serializers.CharField(max_length=100, required=False, allow_blank=True)
    hearing_date = serializers.DateTimeField(required=False, allow_null=True)


class CaseUpdateSerializer(serializers.Serializer):
    case_status = serializers.ChoiceField(choices=CaseStatus.choices, required=False)
    hearing_date = serializers.DateTimeField(required=False)
    verdict = serializers.CharField(required=False, allow_blank=True)

    def validate(self, attrs):
        if not any(attrs.get(f) for f in ("case_status", "hearing_date", "verdict")):
            raise serializers.ValidationError("Nothing to update.")
        return attrs


class AssignJudgeSerializer(serializers.Serializer):
    judge = serializers.IntegerField()


class CaseListSerializer(serializers.ModelSerializer):
    fir_no = serializers.CharField(source="fir.fir_no", read_only=True)
    judge_name = serializers.CharField(source="judge.full_name", read_only=True)
    court_name = serializers.CharField(source="court.name", read_only=True)
    accused_name = serializers.CharField(source="fir.challan.accused.full_name", read_only=True)

    class Meta:
        model = Case
        fields = [
            "id", "case_no", "fir", "fir_no", "judge", "judge_name", "court",
            "court_name", "accused_name", "case_type", "case_status",
            "hearing_date", "verdict", "created_at",
        ]
        read_only_fields = fields


class CaseDetailSerializer(CaseListSerializer):
    court_type = serializers.CharField(source="court.court_type.name", read_only=True)
    judge_rank = serializers.CharField(source="judge.rank", read_only=True)
    accused_cnic = serializers.CharField(source="fir.challan.accused.cnic", read_only=True)
    plate_number = serializers.CharField(source="fir.challan.vehicle.plate_number", read_only=True)
    violation_type = serializers.CharField(source="fir.challan.violation.violation_type", read_only=True)
    challan = serializers.IntegerField(source="fir.challan_id", read_only=True)
    statements = CaseStatementSerializer(many=True, read_only=True)

    class Meta(CaseListSerializer.Meta):
        fields = CaseListSerializer.Meta.fields + [
            "court_type", "judge_rank", "accused_cnic", "plate_number",
            "violation_type", "challan", "year", "sequence", "statements",
            "updated_at",
        ]
        read_only_fields = fields
