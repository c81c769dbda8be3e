"""OpenAI audio implementations of the speech collaborators.

Microphone capture and speaker playback go through sounddevice; the
transcription and synthesis are OpenAI audio API calls.
"""

import asyncio
import io
import wave
from types import ModuleType
from typing import Any

import numpy as np
import openai
from openai import AsyncOpenAI

from ..errors import SpeechServiceError
from .base import SpeechRecognizer, SpeechSynthesizer

SAMPLE_RATE = 16000
TTS_SAMPLE_RATE = 24000  # OpenAI "pcm" output: 24 kHz, 16-bit mono


def load_sounddevice() -> ModuleType:
    """Import sounddevice, which loads the PortAudio library.

    Raises:
        SpeechServiceError: If PortAudio is not installed
    """
    try:
        import sounddevice
    except OSError as e:
        raise SpeechServiceError(f"audio library unavailable: {e}", operation="audio") from e
    return sounddevice


def language_code(locale: str) -> str | None:
    """Primary language subtag of a locale ("en-US" -> "en")."""
    code = locale.replace("_", "-").split("-")[0].strip().lower()
    return code or None


def _pcm16_to_wav(samples: np.ndarray, sample_rate: int) -> bytes:
    buf = io.BytesIO()
    with wave.open(buf, "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(sample_rate)
        wf.writeframes(samples.astype(np.int16).tobytes())
    return buf.getvalue()


class OpenAISpeechRecognizer(SpeechRecognizer):
    """Records the microphone and transcribes it when listening ends.

    Listening ends on :meth:`stop` or after ``max_seconds``. Failures
    during a timed stop are delivered through :meth:`results`, and a
    timed stop that recognized nothing delivers an empty list.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "whisper-1",
        base_url: str | None = None,
        sample_rate: int = SAMPLE_RATE,
        max_seconds: float = 30.0,
        **client_kwargs: Any
    ):
        self._sd = load_sounddevice()
        self._model = model
        self._sample_rate = sample_rate
        self._max_seconds = max_seconds
        self._client = AsyncOpenAI(api_key=api_key, base_url=base_url, **client_kwargs)
        self._stream: Any = None
        self._frames: list[np.ndarray] = []
        self._language: str | None = None
        self._deadline: asyncio.Task | None = None
        self._results: asyncio.Queue[list[str] | SpeechServiceError] = asyncio.Queue()

    @property
    def is_listening(self) -> bool:
        return self._stream is not None

    def _callback(self, indata, _frames, _time_info, _status) -> None:
        # Runs on the PortAudio thread
        self._frames.append(indata[:, 0].copy())

    async def start(self, locale: str) -> None:
        if self._stream is not None:
            return
        self._language = language_code(locale)
        self._frames = []
        try:
            stream = self._sd.InputStream(
                samplerate=self._sample_rate,
                channels=1,
                dtype="int16",
                callback=self._callback,
            )
            stream.start()
        except (self._sd.PortAudioError, OSError) as e:
            raise SpeechServiceError(str(e), operation="start") from e
        self._stream = stream
        self._deadline = asyncio.create_task(self._stop_after_deadline())

    async def _stop_after_deadline(self) -> None:
        await asyncio.sleep(self._max_seconds)
        self._deadline = None
        try:
            text = await self._finish()
        except SpeechServiceError as e:
            await self._results.put(e)
            return
        if not text:
            # Listening ended with nothing to deliver
            await self._results.put([])

    async def stop(self) -> None:
        await self._finish()

    async def _finish(self) -> str:
        """Close the microphone and deliver the transcript, if any."""
        stream = self._stream
        if stream is None:
            return ""
        self._stream = None
        if self._deadline is not None:
            self._deadline.cancel()
            self._deadline = None

        try:
            stream.stop()
            stream.close()
        except (self._sd.PortAudioError, OSError) as e:
            raise SpeechServiceError(str(e), operation="stop") from e

        if not self._frames:
            return ""
        audio = np.concatenate(self._frames)
        self._frames = []

        text = await self._transcribe(audio)
        if text:
            await self._results.put([text])
        return text

    async def _transcribe(self, audio: np.ndarray) -> str:
        request_params: dict[str, Any] = {
            "model": self._model,
            "file": ("dictation.wav", _pcm16_to_wav(audio, self._sample_rate)),
        }
        if self._language:
            request_params["language"] = self._language
        try:
            transcription = await self._client.audio.transcriptions.create(**request_params)
        except openai.APIError as e:
            raise SpeechServiceError(str(e), operation="transcribe") from e
        return (transcription.text or "").strip()

    async def results(self) -> list[str]:
        item = await self._results.get()
        if isinstance(item, SpeechServiceError):
            raise item
        return item

    async def close(self) -> None:
        if self._deadline is not None:
            self._deadline.cancel()
            self._deadline = None
        if self._stream is not None:
            stream, self._stream = self._stream, None
            stream.abort()
            stream.close()
        await self._client.close()


class OpenAISpeechSynthesizer(SpeechSynthesizer):
    """Synthesizes speech with the OpenAI audio API and plays it locally.

    Each :meth:`speak` call takes a request number; audio that arrives
    after :meth:`stop` or a newer :meth:`speak` is dropped.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "tts-1",
        voice: str = "alloy",
        base_url: str | None = None,
        **client_kwargs: Any
    ):
        self._sd = load_sounddevice()
        self._model = model
        self._voice = voice
        self._client = AsyncOpenAI(api_key=api_key, base_url=base_url, **client_kwargs)
        self._request = 0
        self._fetching = False
        self._playing = False

    @property
    def is_speaking(self) -> bool:
        if self._fetching:
            return True
        if not self._playing:
            return False
        try:
            return self._sd.get_stream().active
        except RuntimeError:
            # No stream has been started yet
            return False

    async def speak(self, text: str) -> None:
        if not text:
            return
        self._request += 1
        request = self._request
        self._fetching = True
        try:
            response = await self._client.audio.speech.create(
                model=self._model,
                voice=self._voice,
                input=text,
                response_format="pcm",
            )
        except openai.APIError as e:
            if request != self._request:
                return
            raise SpeechServiceError(str(e), operation="speak") from e
        finally:
            if request == self._request:
                self._fetching = False

        if request != self._request:
            # Stopped or superseded while the audio was being fetched
            return

        samples = np.frombuffer(response.content, dtype=np.int16)
        try:
            self._sd.play(samples, samplerate=TTS_SAMPLE_RATE)
        except (self._sd.PortAudioError, OSError) as e:
            raise SpeechServiceError(str(e), operation="play") from e
        self._playing = True

    async def stop(self) -> None:
        self._request += 1
        self._fetching = False
        if self._playing:
            self._playing = False
            try:
                self._sd.stop()
            except (self._sd.PortAudioError, OSError) as e:
                raise SpeechServiceError(str(e), operation="stop") from e

    async def close(self) -> None:
        await self.stop()
        await self._client.close()
