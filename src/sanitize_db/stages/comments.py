"""Content stage: sanitize non-public comments."""

from ..exceptions import RowWriteFailure
from ..providers import SyntheticKind
from .base import Stage, StageResult


class CommentsStage(Stage):
    """
    Replace author details and body of held comments.

    Approved comments are already public and stay as they are. Pingbacks and
    trackbacks are skipped: they carry no author-supplied text.
    """

    name = 'comments'
    title = 'non-public comments'

    def execute(self, result: StageResult) -> None:
        comments = self.accessor.iter_content(
            self.config.comment_statuses,
            self.config.excluded_comment_types,
            batch_size=self.config.batch_size,
        )
        fake = self.provider

        for count, comment in enumerate(comments, 1):
            fields = {
                'comment_author': fake.generate_different(SyntheticKind.NAME, comment.comment_author),
                'comment_author_email': fake.generate_different(SyntheticKind.EMAIL, comment.comment_author_email),
                'comment_author_url': fake.generate_different(SyntheticKind.URL, comment.comment_author_url),
                'comment_author_IP': fake.generate(SyntheticKind.IPV4),
                'comment_content': fake.generate_different(SyntheticKind.LONG_TEXT, comment.comment_content),
            }
            try:
                self.accessor.update_content(comment.comment_ID, fields)
                result.add('comments')
            except RowWriteFailure as e:
                self.logger.error(str(e))
                result.failures += 1

            if count % self.config.batch_size == 0:
                self.accessor.commit()

        self.accessor.commit()
