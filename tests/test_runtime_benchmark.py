import pytest

from ft8rbn.transport import DryRunSink
from ft8rbn.uploader import upload_lines


@pytest.mark.slow
def test_upload_throughput(benchmark):
    # One busy 40m/20m log: alternate bands every few lines
    lines = []
    for i in range(2000):
        freq = 7074000 + (i * 37) % 3000 if (i // 5) % 2 == 0 else 14074000 + (i * 53) % 3000
        lines.append(f"230101 12{i % 60:02d}00 1.2 {i % 30 - 20} 0.3 {freq} K{i % 10}ABC FN{i % 100:02d}\n")

    def run():
        return upload_lines(lines, DryRunSink(), sleep=lambda s: None)

    stats = benchmark(run)
    assert stats.events == 2000
    assert stats.status_datagrams == 400
