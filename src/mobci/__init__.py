from .credentials.prompt_for_credentials import ask_for_user_provided_async
from .build.android.prepare_job import prepare_job_async
from .build.ios.build import start_ios_build_async
from .build.android.build import start_android_build_async

__all__ = [
    "ask_for_user_provided_async",
    "prepare_job_async",
    "start_ios_build_async",
    "start_android_build_async",
]
