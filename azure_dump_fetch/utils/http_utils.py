"""HTTP download of a single blob through its SAS URL."""

import time
import logging
from urllib.parse import quote

import requests

from azure_dump_fetch.errors import OperatorError

BLOB_URL_TEMPLATE = 'https://{account}.blob.core.windows.net/{container}/{path}?{sas}'


def build_blob_url(account_name, container_name, blob_path, sas_token):
    """Build the HTTPS URL of a blob authorised by a SAS token."""
    return BLOB_URL_TEMPLATE.format(
        account=account_name,
        container=quote(container_name),
        path=quote(blob_path),
        sas=sas_token.lstrip('?'),
    )


def download_file(url, filename, description, chunk_size=8192, log_chunk_size=100*1024*1024):
    """Stream a URL to a local file with progress logging.

    Args:
        url (str): URL to download from (may carry a SAS token, never logged)
        filename (str): Path to save the file to
        description (str): What is being downloaded, for logging
        chunk_size (int): Size of chunks to read
        log_chunk_size (int): Size threshold for logging progress

    Returns:
        str: The filename of the downloaded file

    Raises:
        OperatorError: If the request, the stream or the local write fails
    """
    logging.info('Starting download of %s to %s', description, filename)
    start_time = time.time()

    try:
        with requests.get(url, stream=True) as response:
            response.raise_for_status()
            bytes_written = _stream_response_to_file(
                response, filename, chunk_size, log_chunk_size, description, start_time
            )
    except requests.exceptions.HTTPError as e:
        raise OperatorError(
            f'Download of {description} failed with HTTP {e.response.status_code}',
            reason='download',
        ) from e
    except requests.exceptions.RequestException as e:
        raise OperatorError(
            f'Download of {description} failed: {type(e).__name__}',
            reason='download',
        ) from e
    except OSError as e:
        raise OperatorError(
            f'Could not write {filename}: {e.strerror or e}',
            reason='download',
        ) from e

    _log_download_complete(description, filename, bytes_written, start_time)
    return filename


def _stream_response_to_file(response, filename, chunk_size, log_chunk_size, description, start_time):
    """Write response content to file, return total bytes written."""
    bytes_written = 0
    last_log_time = start_time
    next_log_threshold = log_chunk_size

    with open(filename, 'wb') as f:
        for chunk in response.iter_content(chunk_size=chunk_size):
            if not chunk:
                continue
            f.write(chunk)
            bytes_written += len(chunk)
            if bytes_written >= next_log_threshold:
                current_time = time.time()
                _log_download_progress(
                    description, bytes_written, current_time, start_time, last_log_time, log_chunk_size
                )
                next_log_threshold += log_chunk_size
                last_log_time = current_time
    return bytes_written


def _log_download_progress(description, bytes_downloaded, current_time, start_time, last_log_time, log_chunk_size):
    """Log download progress with speed metrics."""
    mb = bytes_downloaded / (1024 * 1024)
    elapsed = current_time - start_time
    speed = mb / elapsed if elapsed > 0 else 0

    recent_elapsed = current_time - last_log_time
    recent_mb = log_chunk_size / (1024 * 1024)
    recent_speed = recent_mb / recent_elapsed if recent_elapsed > 0 else 0

    logging.info('Downloaded %.2f MB of %s (%.2f MB/s, current: %.2f MB/s)...',
                 mb, description, speed, recent_speed)


def _log_download_complete(description, filename, bytes_downloaded, start_time):
    """Log completion of download with final statistics."""
    total_elapsed = time.time() - start_time
    total_mb = bytes_downloaded / (1024 * 1024)
    avg_speed = total_mb / total_elapsed if total_elapsed > 0 else 0
    logging.info('Downloaded %s to %s (%.2f MB in %.1f seconds, avg: %.2f MB/s)',
                 description, filename, total_mb, total_elapsed, avg_speed)
