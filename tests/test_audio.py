import numpy as np

from heartgate import audio
from heartgate.audio import PEW_DURATION_S, PEW_PEAK_GAIN, PewPlayer, pew_waveform


class TestPewWaveform:
    def test_shape_and_dtype(self):
        wave = pew_waveform(sample_rate=44100)
        assert wave.dtype == np.float32
        assert wave.shape == (int(round(44100 * PEW_DURATION_S)),)

    def test_envelope(self):
        wave = pew_waveform(sample_rate=44100)
        assert np.max(np.abs(wave)) <= PEW_PEAK_GAIN + 1e-6
        # Loudest right after the attack, near-silent at both ends.
        assert np.max(np.abs(wave[:20])) < 0.01
        assert np.max(np.abs(wave[-200:])) < 0.01
        assert np.max(np.abs(wave[800:1200])) > 0.1

    def test_volume_scales(self):
        full = pew_waveform(volume=1.0)
        half = pew_waveform(volume=0.5)
        np.testing.assert_allclose(half, full * 0.5, atol=1e-6)
        assert not np.any(pew_waveform(volume=0.0))


class TestPewPlayer:
    def test_disabled_player_never_touches_device(self, monkeypatch):
        player = PewPlayer(enabled=False)

        def boom():
            raise AssertionError("device opened")

        monkeypatch.setattr(player, "_device", boom)
        player.play()

    def test_missing_portaudio_mutes(self, monkeypatch, caplog):
        player = PewPlayer()

        def no_portaudio():
            raise OSError("PortAudio library not found")

        monkeypatch.setattr(player, "_device", no_portaudio)
        with caplog.at_level("WARNING", logger=audio.__name__):
            player.play()
        assert player.enabled is False
        assert "audio unavailable" in caplog.text

        player.play()

    def test_plays_through_device(self, monkeypatch):
        calls = []

        class FakeSd:
            class PortAudioError(Exception):
                pass

            @staticmethod
            def play(data, samplerate, blocking):
                calls.append((len(data), samplerate, blocking))

            @staticmethod
            def stop():
                calls.append("stop")

        player = PewPlayer(sample_rate=8000)
        monkeypatch.setattr(player, "_device", lambda: FakeSd)
        player._sd = FakeSd
        with player:
            player.play()
        assert calls == [(int(round(8000 * PEW_DURATION_S)), 8000, False), "stop"]
