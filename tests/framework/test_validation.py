"""Tests for required-parameter validation."""

from pathlib import Path

from jobspine.framework.params import describe
from jobspine.framework.validation import describe_violation, missing_required
from tests._support.jobs import AlignJob, ChainJob, IntervalJob, PlainReportJob


class TestDescribeViolation:
    def test_format(self):
        descriptor = describe(AlignJob).get("aligned")
        assert describe_violation(descriptor) == "@Output: aligned - Aligned reads"


class TestMissingRequired:
    """Tests for required-field violations."""

    def test_unset_job_lists_every_required_parameter_sorted(self):
        assert missing_required(AlignJob()) == [
            "@Input: reads - Read files",
            "@Input: reference - Reference sequence",
            "@Output: aligned - Aligned reads",
        ]

    def test_empty_collection_counts_as_missing(self):
        job = AlignJob(reference=Path("ref.fa"), reads=[], aligned=Path("out.bam"))
        assert missing_required(job) == ["@Input: reads - Read files"]

    def test_complete_job(self):
        job = AlignJob(reference=Path("ref.fa"), reads=[Path("a.fq")], aligned=Path("out.bam"))
        assert missing_required(job) == []

    def test_optional_parameters_never_reported(self):
        job = AlignJob(reference=Path("ref.fa"), reads=[Path("a.fq")], aligned=Path("out.bam"), threads=None)
        assert missing_required(job) == []

    def test_value_holder_parameters_are_optional_here(self):
        assert missing_required(ChainJob()) == []


class TestMutualExclusion:
    """Either of two exclusive parameters satisfies both."""

    def test_neither_set(self):
        assert missing_required(IntervalJob()) == [
            "@Argument: interval - Genomic interval",
            "@Input: interval_list - File of intervals",
        ]

    def test_argument_satisfies_input(self):
        assert missing_required(IntervalJob(interval="chr1:1-100")) == []

    def test_input_satisfies_argument(self):
        assert missing_required(IntervalJob(interval_list=Path("targets.list"))) == []

    def test_empty_string_is_a_value(self):
        assert missing_required(IntervalJob(interval="")) == []


class TestJobProperty:
    def test_missing_fields_on_plain_report(self, settings, names, workdir):
        job = PlainReportJob(reference=Path("ref.fa")).freeze(settings, names)
        assert job.missing_fields == ["@Output: result - Report file"]
