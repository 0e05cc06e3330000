"""
String Helper Functions
Naming conversions used for controller files, route names and parameters
"""
import re


class Str:
    """
    String manipulation helper class

    Provides static methods for the conversions the router needs:
    - snake_case for route names
    - StudlyCase for controller class names
    - singular forms for resource parameters
    """

    # Irregular plural -> singular pairs checked before the suffix rules
    _IRREGULAR_SINGULARS = {
        'people': 'person',
        'men': 'man',
        'women': 'woman',
        'children': 'child',
        'mice': 'mouse',
        'geese': 'goose',
        'feet': 'foot',
        'teeth': 'tooth',
    }

    _UNCOUNTABLE = {'news', 'series', 'species', 'data', 'media', 'information', 'equipment'}

    @staticmethod
    def snake(value: str, delimiter: str = '_') -> str:
        """
        Convert a string to snake_case

        Example:
            Str.snake('BlogPosts')  # 'blog_posts'
            Str.snake('blog-posts')  # 'blog_posts'
        """
        if not value:
            return value

        value = value.replace(' ', delimiter).replace('-', delimiter)

        # Insert delimiter before uppercase letters
        value = re.sub('(.)([A-Z][a-z]+)', r'\1' + delimiter + r'\2', value)
        value = re.sub('([a-z0-9])([A-Z])', r'\1' + delimiter + r'\2', value)

        value = value.lower()
        value = re.sub(f'{re.escape(delimiter)}+', delimiter, value)

        return value.strip(delimiter)

    @staticmethod
    def studly(value: str) -> str:
        """
        Convert a string to StudlyCase (PascalCase)

        Example:
            Str.studly('posts_controller')  # 'PostsController'
        """
        if not value:
            return value

        value = value.replace('_', ' ').replace('-', ' ')

        return ''.join(word[:1].upper() + word[1:] for word in value.split())

    @classmethod
    def singular(cls, value: str) -> str:
        """
        Best-effort English singular of a plural noun

        Example:
            Str.singular('posts')     # 'post'
            Str.singular('categories')  # 'category'
            Str.singular('boxes')     # 'box'
        """
        if not value:
            return value

        lower = value.lower()
        if lower in cls._UNCOUNTABLE:
            return value
        if lower in cls._IRREGULAR_SINGULARS:
            return cls._IRREGULAR_SINGULARS[lower]

        if lower.endswith('ies') and len(value) > 3:
            return value[:-3] + 'y'
        if re.search(r'(ss|x|z|ch|sh)es$', lower):
            return value[:-2]
        if lower.endswith('s') and not lower.endswith('ss'):
            return value[:-1]

        return value
