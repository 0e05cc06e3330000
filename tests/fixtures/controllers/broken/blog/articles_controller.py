from girouette import Get, Only, Resource


@Resource('articles')
@Only(['index', 'show'])
class Articles:
    @Get('/articles/feed', 'articles.feed')
    async def feed(self, request):
        return 'feed'


__controller__ = Articles
