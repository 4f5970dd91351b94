import asyncio
import json
import logging
import os
from app.core.errors import MediaToolError
from app.platform.ports.media import Geometry, MediaProberPort, MediaRepackagerPort

log = logging.getLogger("media.ffmpeg")

async def _run(tool: str, cmd: list[str], timeout: float) -> tuple[bytes, bytes]:
    """Run ``cmd`` to completion, returning (stdout, stderr).

    Non-zero exit, launch failure and timeout all raise MediaToolError; on timeout
    the child is killed and reaped before raising.
    """
    log.debug(f"exec {' '.join(cmd)}")
    try:
        proc = await asyncio.create_subprocess_exec(
            *cmd,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as e:
        raise MediaToolError(tool, "could not be started", str(e)) from e

    try:
        stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=timeout)
    except asyncio.TimeoutError:
        proc.kill()
        await proc.wait()
        raise MediaToolError(tool, f"timed out after {timeout:g}s")

    if proc.returncode != 0:
        raise MediaToolError(
            tool, f"failed with exit code {proc.returncode}",
            stderr.decode("utf-8", errors="replace"),
        )
    return stdout, stderr

class FFprobeProber(MediaProberPort):
    def __init__(self, binary: str = "ffprobe", timeout: float = 300.0):
        self.binary = binary
        self.timeout = timeout

    async def probe(self, path: str) -> Geometry:
        cmd = [self.binary, "-v", "error", "-print_format", "json", "-show_streams", path]
        stdout, _ = await _run("ffprobe", cmd, self.timeout)
        try:
            output = json.loads(stdout or b"{}")
        except json.JSONDecodeError as e:
            raise MediaToolError("ffprobe", f"returned invalid JSON ({e})") from e

        stream = next(
            (s for s in output.get("streams") or [] if s.get("codec_type") == "video"),
            None,
        )
        if stream is None:
            raise MediaToolError("ffprobe", "found no video stream in the file")
        try:
            return Geometry(width=int(stream["width"]), height=int(stream["height"]))
        except (KeyError, TypeError, ValueError) as e:
            raise MediaToolError("ffprobe", f"reported a video stream without geometry ({e})") from e

class FFmpegRepackager(MediaRepackagerPort):
    def __init__(self, binary: str = "ffmpeg", timeout: float = 300.0):
        self.binary = binary
        self.timeout = timeout

    async def repackage(self, path: str) -> str:
        out_path = f"{path}.processed.mp4"
        cmd = [
            self.binary, "-y", "-i", path,
            "-movflags", "faststart",
            "-map_metadata", "0",
            "-codec", "copy",
            "-f", "mp4",
            out_path,
        ]
        try:
            await _run("ffmpeg", cmd, self.timeout)
        except MediaToolError:
            # ffmpeg may leave a partial output behind
            if os.path.exists(out_path):
                os.remove(out_path)
            raise
        return out_path
